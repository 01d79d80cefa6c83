"""Velocity engine: storage growth of one agent between two points in time.

Each boundary resolves to the agent's most recent snapshot at or before the
requested time; nothing is interpolated.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..logging_config import get_logger
from ..snapshot.models import AgentSnapshot, ExtensionDelta, ExtensionEntry, VelocityReport

logger = get_logger(__name__)

SnapshotLookup = Callable[[str, int], Optional[AgentSnapshot]]


def reconcile_extension_deltas(
    start: Iterable[ExtensionEntry], end: Iterable[ExtensionEntry]
) -> List[ExtensionDelta]:
    """Per-extension ``(size, count)`` change from *start* to *end*.

    Extensions only in *end* count as fully added, extensions only in
    *start* as fully removed. The result is ordered by absolute size
    change, largest first; ties keep end-snapshot order followed by
    start-snapshot order.
    """
    remaining: Dict[str, Tuple[int, int]] = {ext: (size, count) for ext, size, count in start}
    deltas: List[ExtensionDelta] = []

    for ext, end_size, end_count in end:
        if ext in remaining:
            start_size, start_count = remaining.pop(ext)
            deltas.append(ExtensionDelta(ext, end_size - start_size, end_count - start_count))
        else:
            deltas.append(ExtensionDelta(ext, end_size, end_count))

    for ext, (start_size, start_count) in remaining.items():
        deltas.append(ExtensionDelta(ext, -start_size, -start_count))

    # sorted() is stable under reverse=True
    return sorted(deltas, key=lambda d: abs(d.size_delta), reverse=True)


def velocity_between(
    agent_id: str, start: Optional[AgentSnapshot], end: Optional[AgentSnapshot]
) -> VelocityReport:
    """Report for two already-resolved snapshots; zeroed if either is missing."""
    if start is None or end is None:
        return VelocityReport.zeroed(agent_id)

    duration = end.timestamp - start.timestamp
    growth_bytes = end.total_size_bytes - start.total_size_bytes
    growth_files = end.file_count - start.file_count
    bytes_per_second = growth_bytes / duration if duration > 0 else 0.0

    return VelocityReport(
        agent_id=agent_id,
        t_start=start.timestamp,
        t_end=end.timestamp,
        duration_seconds=duration,
        growth_bytes=growth_bytes,
        growth_files=growth_files,
        bytes_per_second=bytes_per_second,
        extension_deltas=reconcile_extension_deltas(start.top_extensions, end.top_extensions),
    )


def compute_velocity(
    start_lookup: SnapshotLookup,
    end_lookup: SnapshotLookup,
    agent_id: str,
    t_start: int,
    t_end: int,
) -> VelocityReport:
    """Resolve both boundaries through the lookups and compute the report.

    A boundary with no snapshot yields the zeroed report
    (``available=False``), not an error. Exceptions raised by the lookups
    propagate to the caller.
    """
    start = start_lookup(agent_id, t_start)
    end = end_lookup(agent_id, t_end)

    if start is None or end is None:
        logger.warning(
            "Insufficient data for velocity calculation: %s (%d to %d)", agent_id, t_start, t_end
        )
        return VelocityReport.zeroed(agent_id)

    report = velocity_between(agent_id, start, end)
    logger.info(
        "Velocity calculated for %s: %.2f bytes/sec (%d -> %d)",
        agent_id,
        report.bytes_per_second,
        report.t_start,
        report.t_end,
    )
    return report
