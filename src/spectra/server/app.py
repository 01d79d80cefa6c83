"""Starlette ASGI application for snapshot ingestion and time-travel queries."""

from __future__ import annotations

import json
import logging

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..exceptions import SnapshotValidationError
from ..persistence.store import SnapshotStore
from ..snapshot.models import INT64_MAX, INT64_MIN
from .api import agent_history, agent_velocity, ingest_snapshot, known_agents

logger = logging.getLogger(__name__)


def _int_param(request: Request, name: str) -> int | None:
    raw = request.query_params.get(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if INT64_MIN <= value <= INT64_MAX else None


def create_app(store: SnapshotStore) -> Starlette:
    """Build the Starlette application wired to *store*.

    Args:
        store: Snapshot store shared by all requests
    """

    async def api_health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok"})

    async def api_ingest(request: Request) -> JSONResponse:
        """Ingest a snapshot from an agent. POST /api/v1/ingest"""
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse({"error": "Request body must be JSON"}, status_code=422)
        try:
            result = await run_in_threadpool(ingest_snapshot, store, payload)
        except SnapshotValidationError as e:
            logger.warning("Rejected malformed snapshot: %s", e)
            return JSONResponse({"error": str(e)}, status_code=422)
        return JSONResponse(result.message, status_code=200 if result.stored else 503)

    async def api_history(request: Request) -> JSONResponse:
        """Snapshot timestamps for the time slider. GET /api/v1/history/{agent_id}"""
        agent_id = request.path_params["agent_id"]
        timestamps = await run_in_threadpool(agent_history, store, agent_id)
        return JSONResponse(timestamps)

    async def api_velocity(request: Request) -> JSONResponse:
        """Growth between two points in time. GET /api/v1/velocity/{agent_id}?start=&end="""
        agent_id = request.path_params["agent_id"]
        start = _int_param(request, "start")
        end = _int_param(request, "end")
        if start is None or end is None:
            return JSONResponse(
                {"error": "Query parameters 'start' and 'end' must be integer Unix timestamps"},
                status_code=422,
            )
        report = await run_in_threadpool(agent_velocity, store, agent_id, start, end)
        return JSONResponse(report.to_dict())

    async def api_agents(request: Request) -> JSONResponse:
        agents = await run_in_threadpool(known_agents, store)
        return JSONResponse(agents)

    routes = [
        Route("/api/v1/health", api_health),
        Route("/api/v1/ingest", api_ingest, methods=["POST"]),
        Route("/api/v1/agents", api_agents),
        Route("/api/v1/history/{agent_id:path}", api_history),
        Route("/api/v1/velocity/{agent_id:path}", api_velocity),
    ]

    middleware = [
        Middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET", "POST"]),
    ]

    return Starlette(routes=routes, middleware=middleware)
