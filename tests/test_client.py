"""Tests for the HTTP client, against a mocked transport."""

import json

import httpx
import pytest

from spectra.client import SpectraClient
from spectra.exceptions import ServerUnreachableError
from spectra.snapshot.models import AgentSnapshot, VelocityReport


def _client(handler):
    return SpectraClient("http://brain:3000/", transport=httpx.MockTransport(handler))


def _snapshot():
    return AgentSnapshot(
        agent_id="agent_web01",
        timestamp=1700000000,
        hostname="web01",
        total_size_bytes=30,
        file_count=2,
        top_extensions=(("txt", 30, 2),),
    )


def test_upload_posts_snapshot_json():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json="Snapshot stored")

    with _client(handler) as client:
        assert client.upload_snapshot(_snapshot()) == "Snapshot stored"

    assert seen["method"] == "POST"
    assert seen["path"] == "/api/v1/ingest"
    assert seen["body"]["top_extensions"] == [["txt", 30, 2]]


def test_history():
    def handler(request):
        assert request.url.path == "/api/v1/history/agent_web01"
        return httpx.Response(200, json=[300, 200])

    with _client(handler) as client:
        assert client.history("agent_web01") == [300, 200]


def test_velocity_parses_report():
    def handler(request):
        assert request.url.params["start"] == "100"
        assert request.url.params["end"] == "200"
        return httpx.Response(
            200,
            json={
                "agent_id": "agent_web01",
                "t_start": 100,
                "t_end": 200,
                "duration_seconds": 100,
                "growth_bytes": 500,
                "growth_files": 2,
                "bytes_per_second": 5.0,
                "extension_deltas": [{"extension": "log", "size_delta": 500, "count_delta": 2}],
                "available": True,
            },
        )

    with _client(handler) as client:
        report = client.velocity("agent_web01", 100, 200)
    assert report.growth_bytes == 500
    assert report.extension_deltas[0].extension == "log"


def test_http_error_raises_unreachable():
    with _client(lambda request: httpx.Response(503, json="Error: store down")) as client:
        with pytest.raises(ServerUnreachableError) as exc_info:
            client.upload_snapshot(_snapshot())
    assert "503" in exc_info.value.reason


def test_transport_error_raises_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(ServerUnreachableError):
            client.history("agent_web01")


def test_non_json_response_raises_unreachable():
    with _client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(ServerUnreachableError):
            client.history("agent_web01")


def test_agent_id_is_encoded_into_one_path_segment():
    seen = []

    def handler(request):
        seen.append(request.url.raw_path)
        if request.url.path.startswith("/api/v1/history/"):
            return httpx.Response(200, json=[1])
        return httpx.Response(200, json=VelocityReport.zeroed("team/web 01?x#y").to_dict())

    with _client(handler) as client:
        client.history("team/web 01?x#y")
        client.velocity("team/web 01?x#y", 1, 2)

    assert seen[0] == b"/api/v1/history/team%2Fweb%2001%3Fx%23y"
    assert seen[1].startswith(b"/api/v1/velocity/team%2Fweb%2001%3Fx%23y?")
