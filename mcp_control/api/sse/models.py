"""
SSE Models
==========

Pydantic models for the Server-Sent Events transport.
"""

from typing import Any, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict


class ReplayEntry(BaseModel):
    """One broadcast event retained for reconnecting clients."""

    event_id: str = Field(..., description="Event identifier, <epoch_ms>-<sequence>")
    event_name: str = Field(default="", description="Event name; empty means unnamed")
    payload: Any = Field(default=None, description="JSON-serializable event payload")
    data: str = Field(..., description="Wire-ready SSE chunk")

    model_config = ConfigDict(frozen=True)


class SSETransportStats(BaseModel):
    """Statistics for the SSE transport."""

    path: str = Field(..., description="Streaming endpoint path")
    attached: bool = Field(default=False, description="Whether the route is registered")
    heartbeat_running: bool = Field(default=False, description="Whether the heartbeat task runs")
    heartbeat_interval: int = Field(..., description="Heartbeat interval in milliseconds")
    connected_clients: int = Field(default=0, description="Currently connected clients")
    max_clients: int = Field(..., description="Connection limit")
    replay_buffer_size: int = Field(default=0, description="Events currently buffered")
    max_buffer_size: int = Field(..., description="Replay buffer capacity")
    last_event_id: Optional[str] = Field(None, description="Most recently assigned event ID")
    total_events_emitted: int = Field(default=0, description="Events emitted since start")
    total_heartbeats_sent: int = Field(default=0, description="Heartbeat ticks since start")
    total_clients_dropped: int = Field(
        default=0, description="Clients removed after a failed write"
    )
    last_updated: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Snapshot timestamp"
    )
