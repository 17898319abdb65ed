"""
Mouse Tools
===========

Mouse movement, clicks, scrolling and dragging. Target coordinates are
checked against the current screen size before the provider is called.
"""

from mcp_control.config.logging import get_logger
from mcp_control.models.schemas import (
    ClickAtInput,
    ClickMouseInput,
    ControlResponse,
    DoubleClickInput,
    DragMouseInput,
    MousePosition,
    MoveMouseInput,
    ScrollMouseInput,
)
from mcp_control.providers.base import AutomationProvider

from .base import ToolDefinition

logger = get_logger(__name__)


async def ensure_on_screen(provider: AutomationProvider, position: MousePosition) -> None:
    """
    Reject positions outside the primary screen.

    When the screen size cannot be read the check is skipped.

    Raises:
        ValueError: If the position lies outside the screen
    """
    try:
        response = await provider.screen.get_screen_size()
    except Exception as e:
        logger.warning("Error checking screen bounds", error=str(e))
        return

    if not response.success or not isinstance(response.data, dict):
        return

    width = response.data.get("width")
    height = response.data.get("height")
    if not width or not height:
        return

    if not (0 <= position.x < width and 0 <= position.y < height):
        raise ValueError(
            f"Position ({position.x},{position.y}) is outside screen bounds "
            f"(0,0)-({width - 1},{height - 1})"
        )


async def move_mouse(provider: AutomationProvider, params: MoveMouseInput) -> ControlResponse:
    await ensure_on_screen(provider, params)
    return await provider.mouse.move_mouse(MousePosition(x=params.x, y=params.y))


async def click_mouse(provider: AutomationProvider, params: ClickMouseInput) -> ControlResponse:
    return await provider.mouse.click_mouse(params.button)


async def click_at(provider: AutomationProvider, params: ClickAtInput) -> ControlResponse:
    await ensure_on_screen(provider, params)
    return await provider.mouse.click_at(params.x, params.y, params.button)


async def double_click(provider: AutomationProvider, params: DoubleClickInput) -> ControlResponse:
    position = params.position
    if position is not None:
        await ensure_on_screen(provider, position)
    return await provider.mouse.double_click(position)


async def get_cursor_position(provider: AutomationProvider, params: None) -> ControlResponse:
    return await provider.mouse.get_cursor_position()


async def scroll_mouse(provider: AutomationProvider, params: ScrollMouseInput) -> ControlResponse:
    return await provider.mouse.scroll_mouse(params.amount)


async def drag_mouse(provider: AutomationProvider, params: DragMouseInput) -> ControlResponse:
    await ensure_on_screen(provider, params.start)
    await ensure_on_screen(provider, params.end)
    return await provider.mouse.drag_mouse(params.start, params.end, params.button)


MOUSE_TOOLS = [
    ToolDefinition(
        name="move_mouse",
        description="Move the mouse cursor to specific coordinates",
        handler=move_mouse,
        failure_message="Failed to move mouse",
        input_model=MoveMouseInput,
    ),
    ToolDefinition(
        name="click_mouse",
        description="Click the mouse at the current position",
        handler=click_mouse,
        failure_message="Failed to click mouse",
        input_model=ClickMouseInput,
    ),
    ToolDefinition(
        name="click_at",
        description="Move the mouse to coordinates and click",
        handler=click_at,
        failure_message="Failed to click at position",
        input_model=ClickAtInput,
    ),
    ToolDefinition(
        name="double_click",
        description="Double click at the current or given position",
        handler=double_click,
        failure_message="Failed to double click",
        input_model=DoubleClickInput,
    ),
    ToolDefinition(
        name="get_cursor_position",
        description="Get the current cursor position",
        handler=get_cursor_position,
        failure_message="Failed to get cursor position",
        read_only=True,
    ),
    ToolDefinition(
        name="scroll_mouse",
        description="Scroll the mouse wheel; positive amounts scroll up",
        handler=scroll_mouse,
        failure_message="Failed to scroll mouse",
        input_model=ScrollMouseInput,
    ),
    ToolDefinition(
        name="drag_mouse",
        description="Drag the mouse from one position to another",
        handler=drag_mouse,
        failure_message="Failed to drag mouse",
        input_model=DragMouseInput,
    ),
]
