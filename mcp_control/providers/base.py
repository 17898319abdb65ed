"""
Provider Interfaces
===================

Abstract automation interfaces implemented by every backend.

Implementations return a successful ``ControlResponse`` and raise on failure;
the tool layer turns exceptions into failure envelopes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mcp_control.models.schemas import (
    ClipboardInput,
    ControlResponse,
    KeyboardInput,
    KeyCombination,
    KeyHoldOperation,
    MouseButton,
    MousePosition,
    ScreenshotOptions,
)


class ComponentType(str, Enum):
    """Automation component kinds a provider can supply."""

    KEYBOARD = "keyboard"
    MOUSE = "mouse"
    SCREEN = "screen"
    CLIPBOARD = "clipboard"


class KeyboardAutomation(ABC):
    @abstractmethod
    async def type_text(self, input: KeyboardInput) -> ControlResponse: ...

    @abstractmethod
    async def press_key(self, key: str) -> ControlResponse: ...

    @abstractmethod
    async def press_key_combination(self, combination: KeyCombination) -> ControlResponse: ...

    @abstractmethod
    async def hold_key(self, operation: KeyHoldOperation) -> ControlResponse: ...


class MouseAutomation(ABC):
    @abstractmethod
    async def move_mouse(self, position: MousePosition) -> ControlResponse: ...

    @abstractmethod
    async def click_mouse(self, button: MouseButton = MouseButton.LEFT) -> ControlResponse: ...

    @abstractmethod
    async def double_click(self, position: Optional[MousePosition] = None) -> ControlResponse: ...

    @abstractmethod
    async def get_cursor_position(self) -> ControlResponse: ...

    @abstractmethod
    async def scroll_mouse(self, amount: int) -> ControlResponse: ...

    @abstractmethod
    async def drag_mouse(
        self, start: MousePosition, end: MousePosition, button: MouseButton = MouseButton.LEFT
    ) -> ControlResponse: ...

    @abstractmethod
    async def click_at(
        self, x: int, y: int, button: MouseButton = MouseButton.LEFT
    ) -> ControlResponse: ...


class ScreenAutomation(ABC):
    @abstractmethod
    async def get_screen_size(self) -> ControlResponse: ...

    @abstractmethod
    async def get_active_window(self) -> ControlResponse: ...

    @abstractmethod
    async def focus_window(self, title: str) -> ControlResponse: ...

    @abstractmethod
    async def resize_window(self, title: str, width: int, height: int) -> ControlResponse: ...

    @abstractmethod
    async def reposition_window(self, title: str, x: int, y: int) -> ControlResponse: ...

    @abstractmethod
    async def get_screenshot(
        self, options: Optional[ScreenshotOptions] = None
    ) -> ControlResponse: ...


class ClipboardAutomation(ABC):
    @abstractmethod
    async def get_clipboard_content(self) -> ControlResponse: ...

    @abstractmethod
    async def set_clipboard_content(self, input: ClipboardInput) -> ControlResponse: ...

    @abstractmethod
    async def has_clipboard_text(self) -> ControlResponse: ...

    @abstractmethod
    async def clear_clipboard(self) -> ControlResponse: ...


@dataclass
class AutomationProvider:
    """One component of each kind, possibly from different backends."""

    keyboard: KeyboardAutomation
    mouse: MouseAutomation
    screen: ScreenAutomation
    clipboard: ClipboardAutomation
    names: dict[str, str]
