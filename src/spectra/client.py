"""HTTP client for a Spectra server: snapshot upload and time-travel queries."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from .exceptions import ServerUnreachableError
from .logging_config import get_logger
from .snapshot.models import AgentSnapshot, VelocityReport

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


class SpectraClient:
    """Thin synchronous client over the ``/api/v1`` routes.

    Usage::

        with SpectraClient("http://brain:3000") as client:
            client.upload_snapshot(snapshot)
            report = client.velocity("agent_web01", start, end)

    Every transport or HTTP failure is raised as
    :class:`ServerUnreachableError`; no retries are attempted.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SpectraClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{API_PREFIX}{path}"
        try:
            r = self._client.request(method, url, **kwargs)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ServerUnreachableError(
                f"{self.base_url}{url}", f"HTTP {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise ServerUnreachableError(f"{self.base_url}{url}", str(e)) from e

        try:
            return r.json()
        except ValueError as e:
            raise ServerUnreachableError(f"{self.base_url}{url}", f"invalid JSON response: {e}") from e

    def upload_snapshot(self, snapshot: AgentSnapshot) -> str:
        """POST *snapshot* to the ingestion route; returns the acknowledgement."""
        ack = self._request("POST", "/ingest", json=snapshot.to_dict())
        logger.info("Snapshot uploaded to %s: %s", self.base_url, ack)
        return str(ack)

    def history(self, agent_id: str) -> list[int]:
        """Snapshot timestamps of *agent_id*, newest first."""
        data = self._request("GET", f"/history/{quote(agent_id, safe='')}")
        return [int(ts) for ts in data]

    def velocity(self, agent_id: str, start: int, end: int) -> VelocityReport:
        data = self._request(
            "GET", f"/velocity/{quote(agent_id, safe='')}", params={"start": start, "end": end}
        )
        return VelocityReport.from_dict(data)
