"""SQLite persistence for agent snapshots."""

from .database import MEMORY_DB, SnapshotDB
from .store import SnapshotStore

__all__ = ["MEMORY_DB", "SnapshotDB", "SnapshotStore"]
