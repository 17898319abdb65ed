"""PyAutoGUI mouse component."""

import asyncio
from typing import Optional

from mcp_control.models.schemas import ControlResponse, MouseButton, MousePosition
from mcp_control.providers.base import MouseAutomation

from .backend import PyAutoGUIComponent

DRAG_DURATION = 0.2


class PyAutoGUIMouse(PyAutoGUIComponent, MouseAutomation):
    async def move_mouse(self, position: MousePosition) -> ControlResponse:
        await asyncio.to_thread(self.gui.moveTo, position.x, position.y)
        return ControlResponse.ok(f"Mouse moved to position ({position.x}, {position.y})")

    async def click_mouse(self, button: MouseButton = MouseButton.LEFT) -> ControlResponse:
        await asyncio.to_thread(self.gui.click, button=button.value)
        return ControlResponse.ok(f"Clicked {button.value} mouse button")

    async def double_click(self, position: Optional[MousePosition] = None) -> ControlResponse:
        if position is None:
            await asyncio.to_thread(self.gui.doubleClick)
            return ControlResponse.ok("Double-clicked at current position")

        await asyncio.to_thread(self.gui.doubleClick, position.x, position.y)
        return ControlResponse.ok(f"Double-clicked at position ({position.x}, {position.y})")

    async def get_cursor_position(self) -> ControlResponse:
        point = await asyncio.to_thread(self.gui.position)
        return ControlResponse.ok(
            "Cursor position retrieved successfully", {"x": int(point[0]), "y": int(point[1])}
        )

    async def scroll_mouse(self, amount: int) -> ControlResponse:
        await asyncio.to_thread(self.gui.scroll, amount)
        return ControlResponse.ok(f"Scrolled mouse by {amount}")

    async def drag_mouse(
        self, start: MousePosition, end: MousePosition, button: MouseButton = MouseButton.LEFT
    ) -> ControlResponse:
        await asyncio.to_thread(self.gui.moveTo, start.x, start.y)
        await asyncio.to_thread(
            self.gui.dragTo, end.x, end.y, duration=DRAG_DURATION, button=button.value
        )
        return ControlResponse.ok(
            f"Dragged from ({start.x}, {start.y}) to ({end.x}, {end.y}) with {button.value} button"
        )

    async def click_at(
        self, x: int, y: int, button: MouseButton = MouseButton.LEFT
    ) -> ControlResponse:
        await asyncio.to_thread(self.gui.click, x=x, y=y, button=button.value)
        return ControlResponse.ok(f"Clicked {button.value} button at position ({x}, {y})")
