"""
FastAPI Application
===================

HTTP binding for the automation server: the SSE event stream, tool
execution endpoints and health checks.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mcp_control.api.auth import validate_api_key
from mcp_control.api.routes.health import router as health_router
from mcp_control.api.routes.sse import router as sse_router
from mcp_control.api.routes.tools import router as tools_router
from mcp_control.api.sse.transport import SSETransport
from mcp_control.config.logging import get_logger
from mcp_control.config.settings import Settings, get_settings
from mcp_control.mcp_server.server import MCPControlServer
from mcp_control.models.schemas import ErrorResponse
from mcp_control.providers import ProviderRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting FastAPI application")

    transport: Optional[SSETransport] = app.state.transport
    if transport is not None and transport.start_heartbeat():
        logger.info("SSE heartbeat started", interval_ms=transport.heartbeat_interval)

    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")
        if transport is not None:
            transport.close()


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[SSETransport] = None,
    registry: Optional[ProviderRegistry] = None,
    server: Optional[MCPControlServer] = None,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Configuration; defaults to ``get_settings()``
        transport: SSE transport to attach; built from settings when omitted
        registry: Provider registry used when ``server`` is omitted
        server: MCP server whose tools the HTTP endpoints run

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()

    if transport is None and server is not None:
        transport = server.transport
    if transport is None and settings.sse_enabled:
        transport = SSETransport.from_settings(settings)

    if server is None:
        server = MCPControlServer(settings, transport=transport, registry=registry)
    else:
        server.transport = transport

    app = FastAPI(
        title=settings.app_name,
        description="Desktop automation over the Model Context Protocol",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.transport = transport
    app.state.server = server

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore[no-untyped-def]
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(HTTPException)
    async def custom_http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Structured error response for HTTP errors."""
        error_response = ErrorResponse(
            error=str(exc.detail),
            error_code=str(exc.status_code),
            request_id=getattr(request.state, "request_id", None),
        )

        logger.error(
            "HTTP exception",
            status_code=exc.status_code,
            detail=exc.detail,
            request_id=error_response.request_id,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_response.model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        error_response = ErrorResponse(
            error="Internal server error",
            error_code="INTERNAL_ERROR",
            details={"exception": str(exc)} if settings.debug else None,
            request_id=getattr(request.state, "request_id", None),
        )

        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=error_response.request_id,
            exc_info=True,
        )

        return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))

    app.include_router(health_router)
    app.include_router(tools_router)

    if transport is not None:
        app.include_router(sse_router, prefix=transport.path)
        transport.attach(app, dependencies=[Depends(validate_api_key)])

    logger.info(
        "FastAPI application created",
        sse_enabled=transport is not None,
        providers=server.provider.names,
    )
    return app
