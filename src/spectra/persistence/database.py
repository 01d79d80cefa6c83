"""SQLite-backed snapshot database."""

import sqlite3
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

# Current schema version (bump when tables change).
_SCHEMA_VERSION = 1

MEMORY_DB = ":memory:"


class SnapshotDB:
    """Manages the SQLite file holding agent snapshots.

    Usage::

        with SnapshotDB("~/.spectra/snapshots.db") as db:
            save_snapshot(db.conn, snapshot)

    ``":memory:"`` gives a volatile database that lives as long as the
    connection.
    """

    def __init__(self, db_path: str, check_same_thread: bool = True) -> None:
        self.db_path: str = db_path if db_path == MEMORY_DB else str(Path(db_path).expanduser())
        self.check_same_thread = check_same_thread
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection. Raises if not connected."""
        if self._conn is None:
            raise RuntimeError("SnapshotDB is not connected. Use as context manager or call connect().")
        return self._conn

    # ── lifecycle ─────────────────────────────────────────────────

    def connect(self) -> sqlite3.Connection:
        """Open (or create) the database and run migrations."""
        if self.db_path != MEMORY_DB:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path, check_same_thread=self.check_same_thread)
        if self.db_path != MEMORY_DB:
            conn.execute("PRAGMA journal_mode=WAL")
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._migrate()
        logger.debug("Snapshot DB connected at %s", self.db_path)
        return conn

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "SnapshotDB":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── migration ─────────────────────────────────────────────────

    def _migrate(self) -> None:
        """Idempotently create all tables."""
        c = self.conn

        c.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER NOT NULL
            )
            """
        )

        row = c.execute("SELECT version FROM schema_version").fetchone()
        if row is None:
            c.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (_SCHEMA_VERSION,),
            )

        # ── snapshots ────────────────────────────────────────────
        # No uniqueness on (agent_id, timestamp): ingestion is append-only
        # and duplicates are kept.
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS snapshots (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                agent_id         TEXT    NOT NULL,
                timestamp        INTEGER NOT NULL,
                hostname         TEXT    NOT NULL DEFAULT '',
                total_size_bytes INTEGER NOT NULL DEFAULT 0,
                file_count       INTEGER NOT NULL DEFAULT 0,
                top_extensions   TEXT    NOT NULL DEFAULT '[]',
                ingested_at      TEXT    NOT NULL DEFAULT (datetime('now'))
            )
            """
        )

        c.execute(
            "CREATE INDEX IF NOT EXISTS idx_snapshots_agent_time ON snapshots(agent_id, timestamp)"
        )

        c.commit()
