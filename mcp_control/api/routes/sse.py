"""
SSE Routes
==========

Introspection for the event stream. The stream itself is registered by
``SSETransport.attach``.
"""

from fastapi import APIRouter, Depends, Request

from mcp_control.api.auth import validate_api_key
from mcp_control.api.sse.models import SSETransportStats

router = APIRouter(tags=["SSE"], dependencies=[Depends(validate_api_key)])


@router.get("/stats", response_model=SSETransportStats)
async def get_sse_stats(request: Request) -> SSETransportStats:
    """Client count, replay buffer and heartbeat counters."""
    return request.app.state.transport.get_stats()
