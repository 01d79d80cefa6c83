"""Service boundaries behind the HTTP routes: ingestion, history, velocity.

Store failures never escape these functions: ingestion answers with an
error message, history with an empty list, velocity with the zeroed report.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from ..exceptions import StoreUnavailableError
from ..logging_config import get_logger
from ..persistence.store import SnapshotStore
from ..snapshot.models import AgentSnapshot, VelocityReport
from ..temporal.velocity import compute_velocity

logger = get_logger(__name__)

INGEST_ACK = "Snapshot stored"


class IngestResult(NamedTuple):
    stored: bool
    message: str


def ingest_snapshot(store: SnapshotStore, payload: Any) -> IngestResult:
    """Validate *payload* as an :class:`AgentSnapshot` and append it.

    Raises:
        SnapshotValidationError: if the payload is malformed. Nothing is
            stored in that case.
    """
    snapshot = AgentSnapshot.from_dict(payload)
    try:
        store.append(snapshot)
    except StoreUnavailableError as e:
        logger.error("Failed to store snapshot: %s", e)
        return IngestResult(False, f"Error: {e}")

    logger.info(
        "Ingested snapshot: %s @ %d (%dB, %d files)",
        snapshot.agent_id,
        snapshot.timestamp,
        snapshot.total_size_bytes,
        snapshot.file_count,
    )
    return IngestResult(True, INGEST_ACK)


def agent_history(store: SnapshotStore, agent_id: str) -> list[int]:
    """Snapshot timestamps for *agent_id*, newest first; empty on any store error."""
    try:
        timestamps = store.timestamps(agent_id)
    except StoreUnavailableError as e:
        logger.error("Failed to retrieve history: %s", e)
        return []
    logger.info("Retrieved %d timestamps for agent %s", len(timestamps), agent_id)
    return timestamps


def agent_velocity(store: SnapshotStore, agent_id: str, start: int, end: int) -> VelocityReport:
    """Velocity of *agent_id* between *start* and *end*; zeroed on any store error."""
    try:
        return compute_velocity(store.latest_at, store.latest_at, agent_id, start, end)
    except StoreUnavailableError as e:
        logger.error("Failed to resolve snapshots for velocity: %s", e)
        return VelocityReport.zeroed(agent_id)


def known_agents(store: SnapshotStore) -> list[dict]:
    """Agents with stored snapshots; empty on any store error."""
    try:
        return store.agents()
    except StoreUnavailableError as e:
        logger.error("Failed to list agents: %s", e)
        return []
