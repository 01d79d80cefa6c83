"""Thread-safe snapshot store shared by the ingestion server and the CLI."""

import sqlite3
import threading
from typing import Optional

from ..exceptions import StoreUnavailableError
from ..logging_config import get_logger
from ..snapshot.models import AgentSnapshot
from .database import SnapshotDB
from .reader import latest_snapshot_at, list_agents, list_timestamps
from .writer import save_snapshot

logger = get_logger(__name__)


class SnapshotStore:
    """Append/lookup contract over one :class:`SnapshotDB` connection.

    The connection is shared across threads and every operation holds the
    store lock. SQLite failures surface as :class:`StoreUnavailableError`.
    """

    def __init__(self, db_path: str) -> None:
        self._lock = threading.RLock()
        self._db = SnapshotDB(db_path, check_same_thread=False)
        try:
            self._db.connect()
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailableError("connect", str(e))

    @property
    def db_path(self) -> str:
        return self._db.db_path

    def close(self) -> None:
        with self._lock:
            self._db.close()

    def __enter__(self) -> "SnapshotStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def append(self, snapshot: AgentSnapshot) -> int:
        """Durably append *snapshot*; returns its row id."""
        with self._lock:
            try:
                return save_snapshot(self._db.conn, snapshot)
            except (sqlite3.Error, OverflowError, RuntimeError) as e:
                raise StoreUnavailableError("append", str(e))

    def latest_at(self, agent_id: str, timestamp: int) -> Optional[AgentSnapshot]:
        """Most recent snapshot of *agent_id* with ``timestamp <= timestamp``."""
        with self._lock:
            try:
                return latest_snapshot_at(self._db.conn, agent_id, timestamp)
            except (sqlite3.Error, OverflowError, RuntimeError) as e:
                raise StoreUnavailableError("lookup", str(e))

    def timestamps(self, agent_id: str) -> list[int]:
        """Snapshot timestamps of *agent_id*, newest first."""
        with self._lock:
            try:
                return list_timestamps(self._db.conn, agent_id)
            except (sqlite3.Error, OverflowError, RuntimeError) as e:
                raise StoreUnavailableError("history", str(e))

    def agents(self) -> list[dict]:
        """Summary row per known agent."""
        with self._lock:
            try:
                return list_agents(self._db.conn)
            except (sqlite3.Error, OverflowError, RuntimeError) as e:
                raise StoreUnavailableError("agents", str(e))
