"""Data models for agent telemetry: snapshots and the velocity reports derived from them."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from ..exceptions import SnapshotValidationError

# (extension, total size in bytes, file count)
ExtensionEntry = Tuple[str, int, int]

# Stored as SQLite INTEGER, a signed 64-bit value
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_REQUIRED_FIELDS = (
    "agent_id",
    "timestamp",
    "hostname",
    "total_size_bytes",
    "file_count",
    "top_extensions",
)


def _require_int(payload: Mapping[str, Any], name: str, minimum: int = INT64_MIN) -> int:
    value = payload[name]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotValidationError(name, value, "must be an integer")
    if not minimum <= value <= INT64_MAX:
        raise SnapshotValidationError(name, value, f"must be between {minimum} and {INT64_MAX}")
    return value


def _require_str(payload: Mapping[str, Any], name: str, allow_empty: bool = True) -> str:
    value = payload[name]
    if not isinstance(value, str):
        raise SnapshotValidationError(name, value, "must be a string")
    if not allow_empty and not value:
        raise SnapshotValidationError(name, value, "must not be empty")
    return value


def _parse_extension_entry(index: int, raw: Any) -> ExtensionEntry:
    label = f"top_extensions[{index}]"
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise SnapshotValidationError(label, raw, "must be an [extension, size, count] triple")
    ext, size, count = raw
    if not isinstance(ext, str):
        raise SnapshotValidationError(label, raw, "extension must be a string")
    for part in (size, count):
        if isinstance(part, bool) or not isinstance(part, int) or not 0 <= part <= INT64_MAX:
            raise SnapshotValidationError(
                label, raw, f"size and count must be integers between 0 and {INT64_MAX}"
            )
    return (ext, size, count)


def _parse_extensions(raw_extensions: Any) -> Tuple[ExtensionEntry, ...]:
    if not isinstance(raw_extensions, (list, tuple)):
        raise SnapshotValidationError("top_extensions", raw_extensions, "must be a list")
    entries: List[ExtensionEntry] = []
    seen: set = set()
    for i, raw in enumerate(raw_extensions):
        entry = _parse_extension_entry(i, raw)
        # extensions are unique within a snapshot
        if entry[0] in seen:
            raise SnapshotValidationError(
                f"top_extensions[{i}]", raw, f"duplicate extension '{entry[0]}'"
            )
        seen.add(entry[0])
        entries.append(entry)
    return tuple(entries)


@dataclass(frozen=True)
class AgentSnapshot:
    """Point-in-time summary of one agent's filesystem.

    Identity is ``(agent_id, timestamp)``; snapshots are append-only and
    never updated once stored.
    """

    agent_id: str
    timestamp: int  # Unix seconds
    hostname: str
    total_size_bytes: int
    file_count: int
    top_extensions: Tuple[ExtensionEntry, ...] = ()

    @classmethod
    def from_dict(cls, payload: Any) -> "AgentSnapshot":
        """Build a snapshot from decoded JSON, rejecting malformed payloads.

        Raises:
            SnapshotValidationError: on a missing field, a wrong type, an
                integer outside the signed 64-bit range, a negative counter,
                a malformed extension triple or a repeated extension.
        """
        if not isinstance(payload, Mapping):
            raise SnapshotValidationError("<payload>", payload, "must be a JSON object")
        for name in _REQUIRED_FIELDS:
            if name not in payload:
                raise SnapshotValidationError(name, None, "field is required")

        return cls(
            agent_id=_require_str(payload, "agent_id", allow_empty=False),
            timestamp=_require_int(payload, "timestamp"),
            hostname=_require_str(payload, "hostname"),
            total_size_bytes=_require_int(payload, "total_size_bytes", minimum=0),
            file_count=_require_int(payload, "file_count", minimum=0),
            top_extensions=_parse_extensions(payload["top_extensions"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "timestamp": self.timestamp,
            "hostname": self.hostname,
            "total_size_bytes": self.total_size_bytes,
            "file_count": self.file_count,
            "top_extensions": [list(entry) for entry in self.top_extensions],
        }


@dataclass(frozen=True)
class ExtensionDelta:
    """Change of one extension's volume between two snapshots."""

    extension: str
    size_delta: int
    count_delta: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "extension": self.extension,
            "size_delta": self.size_delta,
            "count_delta": self.count_delta,
        }


@dataclass(frozen=True)
class VelocityReport:
    """Growth of one agent's storage between two resolved snapshots.

    ``available`` is False for the zeroed fallback returned when either
    endpoint has no snapshot, so "no data" is not mistaken for "no growth".
    """

    agent_id: str
    t_start: int = 0
    t_end: int = 0
    duration_seconds: int = 0
    growth_bytes: int = 0
    growth_files: int = 0
    bytes_per_second: float = 0.0
    extension_deltas: List[ExtensionDelta] = field(default_factory=list)
    available: bool = True

    @classmethod
    def zeroed(cls, agent_id: str) -> "VelocityReport":
        return cls(agent_id=agent_id, available=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "VelocityReport":
        return cls(
            agent_id=payload["agent_id"],
            t_start=payload["t_start"],
            t_end=payload["t_end"],
            duration_seconds=payload["duration_seconds"],
            growth_bytes=payload["growth_bytes"],
            growth_files=payload["growth_files"],
            bytes_per_second=float(payload["bytes_per_second"]),
            extension_deltas=[
                ExtensionDelta(
                    extension=d["extension"],
                    size_delta=d["size_delta"],
                    count_delta=d["count_delta"],
                )
                for d in payload.get("extension_deltas", [])
            ],
            available=payload.get("available", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent_id": self.agent_id,
            "t_start": self.t_start,
            "t_end": self.t_end,
            "duration_seconds": self.duration_seconds,
            "growth_bytes": self.growth_bytes,
            "growth_files": self.growth_files,
            "bytes_per_second": self.bytes_per_second,
            "extension_deltas": [d.to_dict() for d in self.extension_deltas],
            "available": self.available,
        }
