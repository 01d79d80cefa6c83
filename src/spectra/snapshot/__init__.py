"""Agent snapshots: data models and scan-to-snapshot reduction."""

from .capture import build_agent_snapshot, default_agent_id
from .models import AgentSnapshot, ExtensionDelta, VelocityReport

__all__ = [
    "AgentSnapshot",
    "ExtensionDelta",
    "VelocityReport",
    "build_agent_snapshot",
    "default_agent_id",
]
