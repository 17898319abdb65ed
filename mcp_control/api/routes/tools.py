"""
Tool Routes
===========

Run automation tools over HTTP. Results are the same envelopes MCP clients
receive and are published on the event stream.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from mcp_control.api.auth import validate_api_key
from mcp_control.config.logging import get_logger
from mcp_control.models.schemas import ControlResponse
from mcp_control.tools import ALL_TOOLS, get_tool

logger = get_logger(__name__)

router = APIRouter(
    prefix="/mcp/tools",
    tags=["Tools"],
    dependencies=[Depends(validate_api_key)],
)


@router.get("")
async def list_tools() -> List[Dict[str, Any]]:
    """Available tools with their JSON input schemas."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "input_schema": tool.input_schema(),
            "read_only": tool.read_only,
        }
        for tool in ALL_TOOLS
    ]


@router.post("/{tool_name}", response_model=ControlResponse, response_model_exclude_none=True)
async def call_tool(
    tool_name: str,
    request: Request,
    arguments: Optional[Dict[str, Any]] = Body(default=None),
) -> ControlResponse:
    """
    Execute a tool.

    Invalid arguments and provider failures come back as
    ``success: false`` envelopes with status 200.
    """
    if get_tool(tool_name) is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    return await request.app.state.server.execute_tool(tool_name, arguments)
