"""
PyAutoGUI backend loader.

PyAutoGUI needs a display at import time, so it is imported on first use
rather than when the provider package is imported.
"""

from functools import lru_cache
from typing import Any

from mcp_control.config.logging import get_logger
from mcp_control.exceptions import ProviderError

logger = get_logger(__name__)

# Our key names -> PyAutoGUI key names, where they differ
KEY_MAP = {
    "control": "ctrl",
    "right_shift": "shiftright",
    "escape": "esc",
    "page_up": "pageup",
    "page_down": "pagedown",
    "plus": "+",
}


def map_key(key: str) -> str:
    return KEY_MAP.get(key, key)


@lru_cache(maxsize=1)
def load_pyautogui() -> Any:
    """Import and configure PyAutoGUI."""
    try:
        import pyautogui
    except Exception as e:  # KeyError/OSError when no display is available
        raise ProviderError(f"PyAutoGUI is not available: {e}") from e

    # Moving the cursor to a screen corner aborts automation
    pyautogui.FAILSAFE = True
    pyautogui.PAUSE = 0.05
    logger.info("PyAutoGUI loaded", version=getattr(pyautogui, "__version__", "unknown"))
    return pyautogui


class PyAutoGUIComponent:
    """Base for components that drive PyAutoGUI."""

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend

    @property
    def gui(self) -> Any:
        if self._backend is None:
            self._backend = load_pyautogui()
        return self._backend
