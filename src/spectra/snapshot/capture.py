"""Reduce a completed scan into the compact snapshot an agent uploads."""

import socket
import time
from typing import Optional

from ..models import ScanStats
from .models import AgentSnapshot

DEFAULT_UPLOAD_EXTENSIONS = 10


def default_agent_id(hostname: Optional[str] = None) -> str:
    """Stable agent identity derived from the host name."""
    return f"agent_{hostname or socket.gethostname()}"


def build_agent_snapshot(
    stats: ScanStats,
    agent_id: Optional[str] = None,
    hostname: Optional[str] = None,
    timestamp: Optional[int] = None,
    max_extensions: int = DEFAULT_UPLOAD_EXTENSIONS,
) -> AgentSnapshot:
    """Build an :class:`AgentSnapshot` from *stats*.

    Only the *max_extensions* largest extensions by volume are kept (ties
    broken by name), each as an ``(extension, size, count)`` triple.

    Parameters
    ----------
    stats:
        The completed scan.
    agent_id:
        Agent identity; defaults to ``agent_<hostname>`` so consecutive
        uploads from one machine line up on the same timeline.
    hostname:
        Reported host name; defaults to :func:`socket.gethostname`.
    timestamp:
        Unix seconds; defaults to now.
    """
    hostname = hostname or socket.gethostname()
    top_extensions = tuple(
        (ext, stat.size, stat.count) for ext, stat in stats.extensions_by_size()[:max_extensions]
    )
    return AgentSnapshot(
        agent_id=agent_id or default_agent_id(hostname),
        timestamp=int(time.time()) if timestamp is None else timestamp,
        hostname=hostname,
        total_size_bytes=stats.total_size_bytes,
        file_count=stats.total_files,
        top_extensions=top_extensions,
    )
