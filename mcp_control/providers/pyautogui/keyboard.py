"""PyAutoGUI keyboard component."""

import asyncio
from typing import Iterable, List

from mcp_control.config.logging import get_logger
from mcp_control.models.schemas import (
    ControlResponse,
    KeyboardInput,
    KeyCombination,
    KeyHoldOperation,
    KeyState,
)
from mcp_control.providers.base import KeyboardAutomation

from .backend import PyAutoGUIComponent, map_key

logger = get_logger(__name__)

# Gap between pressing every key of a combination and releasing them
COMBINATION_HOLD_SECONDS = 0.05


class PyAutoGUIKeyboard(PyAutoGUIComponent, KeyboardAutomation):
    async def type_text(self, input: KeyboardInput) -> ControlResponse:
        await asyncio.to_thread(self.gui.write, input.text)
        return ControlResponse.ok("Typed text successfully")

    async def press_key(self, key: str) -> ControlResponse:
        await asyncio.to_thread(self.gui.press, map_key(key))
        return ControlResponse.ok(f"Pressed key: {key}")

    async def press_key_combination(self, combination: KeyCombination) -> ControlResponse:
        pressed: List[str] = []
        try:
            for key in combination.keys:
                await asyncio.to_thread(self.gui.keyDown, map_key(key))
                pressed.append(key)
            await asyncio.sleep(COMBINATION_HOLD_SECONDS)
        finally:
            await self._release(reversed(pressed))

        return ControlResponse.ok(f"Pressed key combination: {'+'.join(combination.keys)}")

    async def hold_key(self, operation: KeyHoldOperation) -> ControlResponse:
        key = map_key(operation.key)

        if operation.state == KeyState.UP:
            await asyncio.to_thread(self.gui.keyUp, key)
            return ControlResponse.ok(f"Key {operation.key} released successfully")

        await asyncio.to_thread(self.gui.keyDown, key)
        try:
            await asyncio.sleep(operation.duration / 1000)
        finally:
            await self._release([operation.key])

        return ControlResponse.ok(
            f"Key {operation.key} held successfully for {operation.duration}ms"
        )

    async def _release(self, keys: Iterable[str]) -> None:
        for key in keys:
            try:
                await asyncio.to_thread(self.gui.keyUp, map_key(key))
            except Exception as e:
                logger.warning("Failed to release key", key=key, error=str(e))
