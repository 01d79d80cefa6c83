"""Append agent snapshots to the snapshot database."""

import json
import sqlite3

from ..snapshot.models import AgentSnapshot


def save_snapshot(conn: sqlite3.Connection, snapshot: AgentSnapshot) -> int:
    """Persist *snapshot* and return its row id.

    Append-only: a second snapshot with the same ``(agent_id, timestamp)``
    is stored as a separate row.
    """
    cur = conn.cursor()
    try:
        cur.execute(
            """
            INSERT INTO snapshots (
                agent_id, timestamp, hostname, total_size_bytes, file_count, top_extensions
            ) VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                snapshot.agent_id,
                snapshot.timestamp,
                snapshot.hostname,
                snapshot.total_size_bytes,
                snapshot.file_count,
                json.dumps([list(entry) for entry in snapshot.top_extensions]),
            ),
        )
        snapshot_id = cur.lastrowid
        assert snapshot_id is not None
        conn.commit()
        return snapshot_id

    except Exception:
        conn.rollback()
        raise
