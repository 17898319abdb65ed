"""
Server-Sent Events (SSE) Infrastructure
======================================

SSE push channel for remote callers.
Broadcasts tool results and server notifications to every connected client.

Components:
- Transport: Client registry, broadcast, replay buffer and heartbeat
- Event System: Event names and SSE protocol framing
- Models: Pydantic models for replay entries and transport statistics
"""

from .transport import SSETransport, SSEClient
from .events import SSEEventType, format_sse_event, HEARTBEAT_CHUNK
from .models import ReplayEntry, SSETransportStats

__all__ = [
    "SSETransport",
    "SSEClient",
    "SSEEventType",
    "format_sse_event",
    "HEARTBEAT_CHUNK",
    "ReplayEntry",
    "SSETransportStats",
]
