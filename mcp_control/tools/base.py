"""
Tool Definitions
================

A tool couples a name, a pydantic input model and a handler that calls the
automation provider. ``run_tool`` validates the raw arguments, runs the
handler and turns every failure into a ``ControlResponse`` envelope.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type
import time

from pydantic import BaseModel, ValidationError

from mcp_control.config.logging import get_logger
from mcp_control.models.schemas import ControlResponse
from mcp_control.providers.base import AutomationProvider

logger = get_logger(__name__)

ToolHandler = Callable[[AutomationProvider, Any], Awaitable[ControlResponse]]


@dataclass(frozen=True)
class ToolDefinition:
    """An automation tool exposed over MCP and HTTP."""

    name: str
    description: str
    handler: ToolHandler
    failure_message: str
    input_model: Optional[Type[BaseModel]] = None
    read_only: bool = False

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the tool arguments."""
        if self.input_model is None:
            return {"type": "object", "properties": {}}
        return self.input_model.model_json_schema()

    def parse_arguments(self, arguments: Optional[Dict[str, Any]]) -> Any:
        if self.input_model is None:
            return None
        return self.input_model.model_validate(arguments or {})


def format_validation_error(error: ValidationError) -> str:
    """One-line summary of a pydantic validation error."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


async def run_tool(
    tool: ToolDefinition,
    provider: AutomationProvider,
    arguments: Optional[Dict[str, Any]] = None,
) -> ControlResponse:
    """
    Validate arguments and execute a tool.

    Never raises: invalid input and provider errors come back as
    ``success=False`` envelopes.
    """
    start_time = time.time()

    try:
        params = tool.parse_arguments(arguments)
    except ValidationError as e:
        message = f"{tool.failure_message}: Invalid input: {format_validation_error(e)}"
        logger.warning("Tool input rejected", tool=tool.name, error=message)
        return ControlResponse.fail(message)

    try:
        response = await tool.handler(provider, params)
    except Exception as e:
        logger.error(
            "Tool execution failed",
            tool=tool.name,
            error_type=type(e).__name__,
            error=str(e),
        )
        return ControlResponse.fail(f"{tool.failure_message}: {e}")

    logger.info(
        "Tool executed",
        tool=tool.name,
        success=response.success,
        execution_time=round(time.time() - start_time, 4),
    )
    return response
