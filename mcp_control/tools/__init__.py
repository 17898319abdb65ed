"""
Automation Tools
================

Every tool the server exposes, keyed by name.
"""

from typing import Dict, List, Optional

from .base import ToolDefinition, format_validation_error, run_tool
from .clipboard import CLIPBOARD_TOOLS
from .keyboard import KEYBOARD_TOOLS
from .mouse import MOUSE_TOOLS
from .screen import SCREEN_TOOLS

ALL_TOOLS: List[ToolDefinition] = [
    *MOUSE_TOOLS,
    *KEYBOARD_TOOLS,
    *SCREEN_TOOLS,
    *CLIPBOARD_TOOLS,
]

TOOLS_BY_NAME: Dict[str, ToolDefinition] = {tool.name: tool for tool in ALL_TOOLS}


def get_tool(name: str) -> Optional[ToolDefinition]:
    """Look up a tool by name."""
    return TOOLS_BY_NAME.get(name)


__all__ = [
    "ALL_TOOLS",
    "TOOLS_BY_NAME",
    "ToolDefinition",
    "format_validation_error",
    "get_tool",
    "run_tool",
]
