"""Keyboard tools."""

from mcp_control.models.schemas import (
    ControlResponse,
    KeyboardInput,
    KeyCombination,
    KeyHoldOperation,
    KeyPressInput,
)
from mcp_control.providers.base import AutomationProvider

from .base import ToolDefinition


async def type_text(provider: AutomationProvider, params: KeyboardInput) -> ControlResponse:
    return await provider.keyboard.type_text(params)


async def press_key(provider: AutomationProvider, params: KeyPressInput) -> ControlResponse:
    return await provider.keyboard.press_key(params.key)


async def press_key_combination(
    provider: AutomationProvider, params: KeyCombination
) -> ControlResponse:
    return await provider.keyboard.press_key_combination(params)


async def hold_key(provider: AutomationProvider, params: KeyHoldOperation) -> ControlResponse:
    return await provider.keyboard.hold_key(params)


KEYBOARD_TOOLS = [
    ToolDefinition(
        name="type_text",
        description="Type text using the keyboard",
        handler=type_text,
        failure_message="Failed to type text",
        input_model=KeyboardInput,
    ),
    ToolDefinition(
        name="press_key",
        description="Press a single keyboard key",
        handler=press_key,
        failure_message="Failed to press key",
        input_model=KeyPressInput,
    ),
    ToolDefinition(
        name="press_key_combination",
        description="Press several keys at once, e.g. ctrl+c",
        handler=press_key_combination,
        failure_message="Failed to press key combination",
        input_model=KeyCombination,
    ),
    ToolDefinition(
        name="hold_key",
        description="Hold a key down for a duration, or press/release it",
        handler=hold_key,
        failure_message="Failed to hold key",
        input_model=KeyHoldOperation,
    ),
]
