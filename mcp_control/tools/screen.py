"""
Screen Tools
============

Screen size, screenshots and window management.
"""

from mcp_control.models.schemas import (
    ControlResponse,
    RepositionWindowInput,
    ResizeWindowInput,
    ScreenshotOptions,
    WindowTarget,
)
from mcp_control.providers.base import AutomationProvider

from .base import ToolDefinition


async def get_screen_size(provider: AutomationProvider, params: None) -> ControlResponse:
    return await provider.screen.get_screen_size()


async def get_screenshot(provider: AutomationProvider, params: ScreenshotOptions) -> ControlResponse:
    return await provider.screen.get_screenshot(params)


async def get_active_window(provider: AutomationProvider, params: None) -> ControlResponse:
    return await provider.screen.get_active_window()


async def focus_window(provider: AutomationProvider, params: WindowTarget) -> ControlResponse:
    return await provider.screen.focus_window(params.title)


async def resize_window(provider: AutomationProvider, params: ResizeWindowInput) -> ControlResponse:
    return await provider.screen.resize_window(params.title, params.width, params.height)


async def reposition_window(
    provider: AutomationProvider, params: RepositionWindowInput
) -> ControlResponse:
    return await provider.screen.reposition_window(params.title, params.x, params.y)


SCREEN_TOOLS = [
    ToolDefinition(
        name="get_screen_size",
        description="Get the screen dimensions",
        handler=get_screen_size,
        failure_message="Failed to get screen size",
        read_only=True,
    ),
    ToolDefinition(
        name="get_screenshot",
        description="Take a screenshot of the screen or a region of it",
        handler=get_screenshot,
        failure_message="Failed to capture screenshot",
        input_model=ScreenshotOptions,
        read_only=True,
    ),
    ToolDefinition(
        name="get_active_window",
        description="Get information about the currently active window",
        handler=get_active_window,
        failure_message="Failed to get active window information",
        read_only=True,
    ),
    ToolDefinition(
        name="focus_window",
        description="Bring the first window whose title matches to the foreground",
        handler=focus_window,
        failure_message="Failed to focus window",
        input_model=WindowTarget,
    ),
    ToolDefinition(
        name="resize_window",
        description="Resize a window by title",
        handler=resize_window,
        failure_message="Failed to resize window",
        input_model=ResizeWindowInput,
    ),
    ToolDefinition(
        name="reposition_window",
        description="Move a window by title",
        handler=reposition_window,
        failure_message="Failed to reposition window",
        input_model=RepositionWindowInput,
    ),
]
