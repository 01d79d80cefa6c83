"""
Spectra - Storage Topology Profiler

Profiles a filesystem subtree in a single streaming pass (total size,
file and folder counts, volume per extension, the largest files) and
tracks how those aggregates grow over time from agent snapshots.
"""

__version__ = "0.4.0"

from .models import ExtensionStat, FileRecord, ScanStats
from .scanning import Scanner, scan
from .snapshot import AgentSnapshot, ExtensionDelta, VelocityReport, build_agent_snapshot
from .temporal import compute_velocity

__all__ = [
    "scan",  # Main entry point
    "Scanner",
    "ScanStats",
    "FileRecord",
    "ExtensionStat",
    "AgentSnapshot",
    "ExtensionDelta",
    "VelocityReport",
    "build_agent_snapshot",
    "compute_velocity",
]
