"""Data models for a single scan and its per-extension rollups."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class FileRecord:
    """A file seen during a scan, ranked by size in the top-K list."""

    path: str
    size_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "size_bytes": self.size_bytes}


@dataclass
class ExtensionStat:
    """Running (count, size) pair for one normalized extension.

    Mutated in place by the ledger during a scan; entries are only ever
    created for an extension that has been seen, so ``count >= 1``.
    """

    count: int = 0
    size: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"count": self.count, "size": self.size}


@dataclass(frozen=True)
class ScanStats:
    """Aggregate result of one scan.

    ``total_size_bytes`` is the exact sum over every visited file;
    ``top_files`` is a descending view of at most K of them.
    """

    root_path: str
    total_files: int = 0
    total_folders: int = 0
    total_size_bytes: int = 0
    scan_duration_ms: int = 0
    extensions: Dict[str, ExtensionStat] = field(default_factory=dict)
    top_files: List[FileRecord] = field(default_factory=list)

    def extensions_by_size(self) -> List[tuple]:
        """``(extension, stat)`` pairs, largest volume first, ties by name."""
        return sorted(self.extensions.items(), key=lambda kv: (-kv[1].size, kv[0]))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root_path": self.root_path,
            "total_files": self.total_files,
            "total_folders": self.total_folders,
            "total_size_bytes": self.total_size_bytes,
            "scan_duration_ms": self.scan_duration_ms,
            "extensions": {ext: stat.to_dict() for ext, stat in self.extensions.items()},
            "top_files": [f.to_dict() for f in self.top_files],
        }
