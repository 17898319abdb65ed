"""
SSE Events
==========

Server-Sent Events type definitions and formatting functions.
Defines event names and handles SSE protocol framing.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum
import json

# Comment-only chunk; keeps intermediaries from closing idle streams.
HEARTBEAT_CHUNK = ":\n\n"


class SSEEventType(str, Enum):
    """Server-Sent Events event names emitted by the server."""

    # Tool execution results
    TOOL_RESPONSE = "mcp.tool.response"


def make_serializable(data: Any) -> Any:
    """Convert data to JSON-serializable format."""
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    elif isinstance(data, datetime):
        return data.isoformat()
    elif isinstance(data, Enum):
        return data.value
    elif isinstance(data, dict):
        return {str(k): make_serializable(v) for k, v in data.items()}
    elif isinstance(data, (list, tuple)):
        return [make_serializable(item) for item in data]
    else:
        return data


def format_sse_event(event_name: str, payload: Any, event_id: Optional[str] = None) -> str:
    """
    Format a payload for the Server-Sent Events protocol.

    Args:
        event_name: Event name; empty string omits the ``event:`` line so the
            client dispatches to its generic message listener
        payload: JSON-serializable value
        event_id: Optional event ID for Last-Event-ID tracking

    Returns:
        Formatted SSE chunk terminated by a blank line

    Raises:
        TypeError: If the payload is not JSON serializable
        ValueError: If the payload contains NaN or infinite floats
    """
    data_json = json.dumps(make_serializable(payload), separators=(",", ":"), allow_nan=False)

    chunk = ""
    if event_id is not None:
        chunk += f"id:{event_id}\n"
    if event_name:
        chunk += f"event:{event_name}\n"
    chunk += f"data:{data_json}\n\n"
    return chunk


def format_retry(retry_ms: int) -> str:
    """Format the reconnection-delay directive."""
    return f"retry: {retry_ms}\n\n"


def create_tool_response_payload(
    tool_name: str,
    success: bool,
    message: str,
    request_id: Optional[str] = None,
    execution_time: Optional[float] = None,
) -> Dict[str, Any]:
    """Payload for an ``mcp.tool.response`` event."""
    return {
        "tool": tool_name,
        "success": success,
        "message": message,
        "request_id": request_id,
        "execution_time": execution_time,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
