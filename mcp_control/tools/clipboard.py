"""Clipboard tools."""

from mcp_control.models.schemas import ClipboardInput, ControlResponse
from mcp_control.providers.base import AutomationProvider

from .base import ToolDefinition


async def get_clipboard_content(provider: AutomationProvider, params: None) -> ControlResponse:
    return await provider.clipboard.get_clipboard_content()


async def set_clipboard_content(
    provider: AutomationProvider, params: ClipboardInput
) -> ControlResponse:
    return await provider.clipboard.set_clipboard_content(params)


async def has_clipboard_text(provider: AutomationProvider, params: None) -> ControlResponse:
    return await provider.clipboard.has_clipboard_text()


async def clear_clipboard(provider: AutomationProvider, params: None) -> ControlResponse:
    return await provider.clipboard.clear_clipboard()


CLIPBOARD_TOOLS = [
    ToolDefinition(
        name="get_clipboard_content",
        description="Get the current clipboard text",
        handler=get_clipboard_content,
        failure_message="Failed to get clipboard content",
        read_only=True,
    ),
    ToolDefinition(
        name="set_clipboard_content",
        description="Replace the clipboard text",
        handler=set_clipboard_content,
        failure_message="Failed to set clipboard content",
        input_model=ClipboardInput,
    ),
    ToolDefinition(
        name="has_clipboard_text",
        description="Check whether the clipboard holds text",
        handler=has_clipboard_text,
        failure_message="Failed to check clipboard",
        read_only=True,
    ),
    ToolDefinition(
        name="clear_clipboard",
        description="Clear the clipboard",
        handler=clear_clipboard,
        failure_message="Failed to clear clipboard",
    ),
]
