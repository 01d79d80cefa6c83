"""Read agent snapshots back from the snapshot database."""

import json
import sqlite3
from typing import Optional

from ..snapshot.models import AgentSnapshot


def latest_snapshot_at(
    conn: sqlite3.Connection, agent_id: str, timestamp: int
) -> Optional[AgentSnapshot]:
    """Most recent snapshot of *agent_id* taken at or before *timestamp*.

    Among duplicates sharing a timestamp the last ingested one wins.
    Returns ``None`` when the agent has nothing that old.
    """
    row = conn.execute(
        """
        SELECT * FROM snapshots
        WHERE agent_id = ? AND timestamp <= ?
        ORDER BY timestamp DESC, id DESC
        LIMIT 1
        """,
        (agent_id, timestamp),
    ).fetchone()

    if row is None:
        return None

    return _hydrate(row)


def list_timestamps(conn: sqlite3.Connection, agent_id: str) -> list[int]:
    """All snapshot timestamps of *agent_id*, newest first."""
    rows = conn.execute(
        "SELECT timestamp FROM snapshots WHERE agent_id = ? ORDER BY timestamp DESC, id DESC",
        (agent_id,),
    ).fetchall()
    return [int(r["timestamp"]) for r in rows]


def list_agents(conn: sqlite3.Connection) -> list[dict]:
    """Known agents with snapshot counts and their time span."""
    rows = conn.execute(
        """
        SELECT agent_id,
               COUNT(*)       AS snapshot_count,
               MIN(timestamp) AS first_seen,
               MAX(timestamp) AS last_seen
        FROM snapshots
        GROUP BY agent_id
        ORDER BY last_seen DESC
        """
    ).fetchall()
    return [dict(r) for r in rows]


def _hydrate(row: sqlite3.Row) -> AgentSnapshot:
    return AgentSnapshot(
        agent_id=row["agent_id"],
        timestamp=int(row["timestamp"]),
        hostname=row["hostname"],
        total_size_bytes=int(row["total_size_bytes"]),
        file_count=int(row["file_count"]),
        top_extensions=tuple(
            (str(ext), int(size), int(count)) for ext, size, count in json.loads(row["top_extensions"])
        ),
    )
