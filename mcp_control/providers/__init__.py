"""
Automation Providers
====================

Interchangeable backends for mouse, keyboard, screen and clipboard automation.

Components:
- base: Abstract component interfaces and the composite AutomationProvider
- registry: Provider registry with memoized component construction
- factory: Built-in backend registration and provider assembly from settings
- pyautogui: PyAutoGUI mouse, keyboard and screen backend
- clipboard: pyperclip and PowerShell clipboard backends
"""

from .base import (
    AutomationProvider,
    ClipboardAutomation,
    ComponentType,
    KeyboardAutomation,
    MouseAutomation,
    ScreenAutomation,
)
from .registry import ProviderRegistry
from .factory import (
    create_automation_provider,
    create_provider_registry,
    register_builtin_providers,
    resolve_provider_names,
)

__all__ = [
    "AutomationProvider",
    "ClipboardAutomation",
    "ComponentType",
    "KeyboardAutomation",
    "MouseAutomation",
    "ScreenAutomation",
    "ProviderRegistry",
    "create_automation_provider",
    "create_provider_registry",
    "register_builtin_providers",
    "resolve_provider_names",
]
