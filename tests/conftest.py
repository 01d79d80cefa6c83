"""Shared test fixtures for Spectra tests."""

from pathlib import Path
from typing import Dict, Sequence, Tuple

import pytest

from spectra.persistence import MEMORY_DB, SnapshotStore
from spectra.snapshot.models import AgentSnapshot


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def write_tree(root: Path, files: Dict[str, int]) -> Path:
    """Create ``relative path -> size`` files under *root* and return it."""
    for rel, size in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"x" * size)
    return root


@pytest.fixture
def make_tree(tmp_path):
    """Factory: build a file tree with known sizes inside tmp_path."""

    def _make(files: Dict[str, int], name: str = "root") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)

    return _make


def make_snapshot(
    timestamp: int,
    total_size_bytes: int = 0,
    file_count: int = 0,
    top_extensions: Sequence[Tuple[str, int, int]] = (),
    agent_id: str = "agent_sim_01",
    hostname: str = "sim-host",
) -> AgentSnapshot:
    return AgentSnapshot(
        agent_id=agent_id,
        timestamp=timestamp,
        hostname=hostname,
        total_size_bytes=total_size_bytes,
        file_count=file_count,
        top_extensions=tuple(top_extensions),
    )


@pytest.fixture
def snapshot_factory():
    """Factory for AgentSnapshot instances with sensible defaults."""
    return make_snapshot


@pytest.fixture
def memory_store():
    """In-memory snapshot store, closed after the test."""
    store = SnapshotStore(MEMORY_DB)
    yield store
    store.close()
