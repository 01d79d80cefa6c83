"""Tests for the Starlette routes."""

import pytest
from starlette.testclient import TestClient

from spectra.persistence import MEMORY_DB, SnapshotStore
from spectra.server.app import create_app


def _payload(timestamp, total_size_bytes=0, file_count=0):
    return {
        "agent_id": "agent_sim_01",
        "timestamp": timestamp,
        "hostname": "sim-host",
        "total_size_bytes": total_size_bytes,
        "file_count": file_count,
        "top_extensions": [["log", total_size_bytes, file_count]],
    }


@pytest.fixture
def client(memory_store):
    return TestClient(create_app(memory_store))


class TestIngestRoute:
    def test_accepts_valid_snapshot(self, client):
        r = client.post("/api/v1/ingest", json=_payload(100))
        assert r.status_code == 200
        assert r.json() == "Snapshot stored"

    def test_rejects_malformed_snapshot(self, client):
        bad = _payload(100)
        del bad["hostname"]
        r = client.post("/api/v1/ingest", json=bad)
        assert r.status_code == 422
        assert "hostname" in r.json()["error"]

    def test_rejects_non_json_body(self, client):
        r = client.post(
            "/api/v1/ingest", content=b"not json", headers={"content-type": "application/json"}
        )
        assert r.status_code == 422

    def test_size_beyond_int64_is_422(self, client):
        r = client.post("/api/v1/ingest", json=_payload(100, total_size_bytes=2**64 - 1))
        assert r.status_code == 422
        assert "total_size_bytes" in r.json()["error"]
        assert client.get("/api/v1/history/agent_sim_01").json() == []

    def test_duplicate_extension_is_422(self, client):
        payload = _payload(100)
        payload["top_extensions"] = [["log", 10, 1], ["log", 20, 1]]
        assert client.post("/api/v1/ingest", json=payload).status_code == 422

    def test_store_failure_is_503(self):
        store = SnapshotStore(MEMORY_DB)
        store.close()
        r = TestClient(create_app(store)).post("/api/v1/ingest", json=_payload(1))
        assert r.status_code == 503
        assert r.json().startswith("Error:")

    def test_get_not_allowed(self, client):
        assert client.get("/api/v1/ingest").status_code == 405


class TestQueryRoutes:
    def test_health(self, client):
        assert client.get("/api/v1/health").json() == {"status": "ok"}

    def test_history(self, client):
        for ts in (100, 200):
            client.post("/api/v1/ingest", json=_payload(ts))
        assert client.get("/api/v1/history/agent_sim_01").json() == [200, 100]
        assert client.get("/api/v1/history/unknown").json() == []

    def test_velocity(self, client):
        client.post("/api/v1/ingest", json=_payload(100, 1000, 10))
        client.post("/api/v1/ingest", json=_payload(200, 1500, 12))

        r = client.get("/api/v1/velocity/agent_sim_01", params={"start": 100, "end": 200})
        assert r.status_code == 200
        body = r.json()
        assert body["duration_seconds"] == 100
        assert body["growth_bytes"] == 500
        assert body["growth_files"] == 2
        assert body["bytes_per_second"] == 5.0
        assert body["available"] is True
        assert body["extension_deltas"] == [
            {"extension": "log", "size_delta": 500, "count_delta": 2}
        ]

    def test_velocity_without_data_is_zeroed(self, client):
        r = client.get("/api/v1/velocity/nobody", params={"start": 0, "end": 10})
        assert r.status_code == 200
        assert r.json()["available"] is False
        assert r.json()["growth_bytes"] == 0

    @pytest.mark.parametrize(
        "query",
        ["", "?start=1", "?start=a&end=2", "?start=1&end=2.5", f"?start=0&end={2**63}"],
    )
    def test_velocity_bad_params(self, client, query):
        r = client.get(f"/api/v1/velocity/agent_sim_01{query}")
        assert r.status_code == 422

    def test_agents(self, client):
        client.post("/api/v1/ingest", json=_payload(7))
        assert client.get("/api/v1/agents").json() == [
            {"agent_id": "agent_sim_01", "snapshot_count": 1, "first_seen": 7, "last_seen": 7}
        ]

    def test_agent_id_with_reserved_characters(self, client):
        payload = _payload(9)
        payload["agent_id"] = "team/web 01"
        client.post("/api/v1/ingest", json=payload)

        assert client.get("/api/v1/history/team%2Fweb%2001").json() == [9]
        r = client.get("/api/v1/velocity/team%2Fweb%2001", params={"start": 9, "end": 9})
        assert r.json()["agent_id"] == "team/web 01"
        assert r.json()["available"] is True
