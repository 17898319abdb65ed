"""
Provider Factory
================

Registers the built-in backends and assembles an ``AutomationProvider``
from settings. Each component may come from a different backend:
``automation_provider`` names the default, and the per-component settings
(``keyboard_provider``, ``mouse_provider``, ``screen_provider``,
``clipboard_provider``) override it.
"""

from typing import Dict, Optional, TYPE_CHECKING

from mcp_control.config.logging import get_logger

from .base import AutomationProvider, ComponentType
from .clipboard import PowerShellClipboard, PyperclipClipboard
from .pyautogui import PyAutoGUIKeyboard, PyAutoGUIMouse, PyAutoGUIScreen
from .registry import ProviderRegistry

if TYPE_CHECKING:
    from mcp_control.config.settings import Settings

logger = get_logger(__name__)


def register_builtin_providers(registry: ProviderRegistry) -> ProviderRegistry:
    """Register every backend shipped with the server."""
    registry.register(ComponentType.KEYBOARD, "pyautogui", PyAutoGUIKeyboard)
    registry.register(ComponentType.MOUSE, "pyautogui", PyAutoGUIMouse)
    registry.register(ComponentType.SCREEN, "pyautogui", PyAutoGUIScreen)
    registry.register(ComponentType.CLIPBOARD, "pyperclip", PyperclipClipboard)
    registry.register(ComponentType.CLIPBOARD, "powershell", PowerShellClipboard)
    return registry


def create_provider_registry() -> ProviderRegistry:
    """New registry holding the built-in backends."""
    return register_builtin_providers(ProviderRegistry())


def resolve_provider_names(settings: "Settings") -> Dict[str, str]:
    """Provider name per component after applying overrides."""
    default = settings.automation_provider
    overrides: Dict[ComponentType, Optional[str]] = {
        ComponentType.KEYBOARD: settings.keyboard_provider,
        ComponentType.MOUSE: settings.mouse_provider,
        ComponentType.SCREEN: settings.screen_provider,
        ComponentType.CLIPBOARD: settings.clipboard_provider,
    }
    return {
        component.value: (overrides[component] or default).lower() for component in ComponentType
    }


def create_automation_provider(
    settings: "Settings", registry: ProviderRegistry
) -> AutomationProvider:
    """
    Create the composite provider described by ``settings``.

    Components are resolved through ``registry``, so repeated calls share
    component instances.

    Raises:
        UnknownProviderError: If a configured name is not registered
    """
    names = resolve_provider_names(settings)

    provider = AutomationProvider(
        keyboard=registry.get_keyboard(names[ComponentType.KEYBOARD.value]),
        mouse=registry.get_mouse(names[ComponentType.MOUSE.value]),
        screen=registry.get_screen(names[ComponentType.SCREEN.value]),
        clipboard=registry.get_clipboard(names[ComponentType.CLIPBOARD.value]),
        names=names,
    )
    logger.info("Automation provider created", **names)
    return provider
