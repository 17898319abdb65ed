"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from fastapi import APIRouter, Request

from mcp_control.api.auth import get_app_settings
from mcp_control.config.logging import get_logger
from mcp_control.models.schemas import HealthStatus

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request) -> HealthStatus:
    """Application status, configured providers and SSE client count."""
    settings = get_app_settings(request)
    server = request.app.state.server
    transport = request.app.state.transport

    transport_open = transport is None or not transport.closed

    return HealthStatus(
        status="healthy" if transport_open else "unhealthy",
        version=settings.app_version,
        providers=dict(server.provider.names),
        sse_enabled=transport is not None,
        sse_clients=transport.get_client_count() if transport is not None else 0,
    )
