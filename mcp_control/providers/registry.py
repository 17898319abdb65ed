"""
Provider Registry
=================

Central registry for automation components.

Backends register a factory per component kind under a provider name.
Components are constructed on first lookup and memoized, so every caller
holding the same registry shares one instance per (kind, name). The
registry is created by the composition root and passed to whatever needs
to resolve providers.
"""

from typing import Any, Callable, Dict, List, Tuple, cast

from mcp_control.config.logging import get_logger
from mcp_control.exceptions import UnknownProviderError

from .base import (
    ClipboardAutomation,
    ComponentType,
    KeyboardAutomation,
    MouseAutomation,
    ScreenAutomation,
)

logger = get_logger(__name__)

ComponentFactory = Callable[[], Any]


class ProviderRegistry:
    """Registry of component factories with memoized construction."""

    def __init__(self) -> None:
        self._factories: Dict[ComponentType, Dict[str, ComponentFactory]] = {
            component: {} for component in ComponentType
        }
        self._instances: Dict[Tuple[ComponentType, str], Any] = {}
        self.logger: Any = logger.bind(component="provider_registry")

    def register(self, component: ComponentType, name: str, factory: ComponentFactory) -> None:
        """
        Register a component factory.

        Re-registering a name replaces the factory and drops any cached instance.
        """
        key = name.lower()
        self._factories[component][key] = factory
        self._instances.pop((component, key), None)
        self.logger.debug("Provider registered", kind=component.value, name=key)

    def resolve(self, component: ComponentType, name: str) -> Any:
        """
        Get the component instance registered under ``name``.

        Raises:
            UnknownProviderError: If no factory is registered under that name
        """
        key = name.lower()
        cached = self._instances.get((component, key))
        if cached is not None:
            return cached

        factory = self._factories[component].get(key)
        if factory is None:
            raise UnknownProviderError(component.value, name, self.names(component))

        instance = factory()
        self._instances[(component, key)] = instance
        self.logger.info("Provider initialized", kind=component.value, name=key)
        return instance

    def names(self, component: ComponentType) -> List[str]:
        return sorted(self._factories[component])

    def available_providers(self) -> Dict[str, List[str]]:
        """Registered provider names per component kind."""
        return {component.value: self.names(component) for component in ComponentType}

    def is_registered(self, component: ComponentType, name: str) -> bool:
        return name.lower() in self._factories[component]

    def clear_cache(self) -> None:
        """Forget constructed instances; factories stay registered."""
        self._instances.clear()

    def get_keyboard(self, name: str) -> KeyboardAutomation:
        return cast(KeyboardAutomation, self.resolve(ComponentType.KEYBOARD, name))

    def get_mouse(self, name: str) -> MouseAutomation:
        return cast(MouseAutomation, self.resolve(ComponentType.MOUSE, name))

    def get_screen(self, name: str) -> ScreenAutomation:
        return cast(ScreenAutomation, self.resolve(ComponentType.SCREEN, name))

    def get_clipboard(self, name: str) -> ClipboardAutomation:
        return cast(ClipboardAutomation, self.resolve(ComponentType.CLIPBOARD, name))
