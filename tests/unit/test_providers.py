"""
Provider Registry and Factory Tests
===================================

Unit tests for provider registration, memoized resolution and assembling
the composite provider from settings.
"""

from unittest.mock import MagicMock

import pytest

from mcp_control.exceptions import UnknownProviderError
from mcp_control.providers import (
    ComponentType,
    ProviderRegistry,
    create_automation_provider,
    create_provider_registry,
    resolve_provider_names,
)
from mcp_control.providers.clipboard import PowerShellClipboard, PyperclipClipboard
from mcp_control.providers.pyautogui import PyAutoGUIKeyboard, PyAutoGUIMouse, PyAutoGUIScreen


class TestProviderRegistry:
    """Test the component registry."""

    def test_resolve_is_memoized(self):
        registry = ProviderRegistry()
        factory = MagicMock(side_effect=lambda: object())
        registry.register(ComponentType.MOUSE, "fake", factory)

        first = registry.resolve(ComponentType.MOUSE, "fake")
        second = registry.resolve(ComponentType.MOUSE, "FAKE")

        assert first is second
        factory.assert_called_once()

    def test_components_are_separate(self):
        registry = ProviderRegistry()
        registry.register(ComponentType.MOUSE, "fake", object)
        registry.register(ComponentType.KEYBOARD, "fake", object)

        assert registry.get_mouse("fake") is not registry.get_keyboard("fake")

    def test_unknown_provider(self):
        registry = ProviderRegistry()
        registry.register(ComponentType.CLIPBOARD, "fake", object)

        with pytest.raises(UnknownProviderError) as exc_info:
            registry.get_clipboard("missing")

        assert exc_info.value.available == ["fake"]
        assert "missing" in str(exc_info.value)

    def test_reregister_drops_cached_instance(self):
        registry = ProviderRegistry()
        registry.register(ComponentType.SCREEN, "fake", object)
        before = registry.get_screen("fake")

        registry.register(ComponentType.SCREEN, "fake", object)

        assert registry.get_screen("fake") is not before

    def test_clear_cache(self):
        registry = ProviderRegistry()
        registry.register(ComponentType.SCREEN, "fake", object)
        before = registry.get_screen("fake")

        registry.clear_cache()

        assert registry.get_screen("fake") is not before
        assert registry.is_registered(ComponentType.SCREEN, "Fake")


class TestProviderFactory:
    """Test building providers from settings."""

    def test_builtin_providers(self):
        registry = create_provider_registry()

        assert registry.available_providers() == {
            "keyboard": ["pyautogui"],
            "mouse": ["pyautogui"],
            "screen": ["pyautogui"],
            "clipboard": ["powershell", "pyperclip"],
        }

    def test_default_provider(self, test_settings):
        provider = create_automation_provider(test_settings, create_provider_registry())

        assert isinstance(provider.keyboard, PyAutoGUIKeyboard)
        assert isinstance(provider.mouse, PyAutoGUIMouse)
        assert isinstance(provider.screen, PyAutoGUIScreen)
        assert isinstance(provider.clipboard, PyperclipClipboard)
        assert provider.names["clipboard"] == "pyperclip"

    def test_component_override(self, test_settings):
        settings = test_settings.model_copy(update={"clipboard_provider": "PowerShell"})

        provider = create_automation_provider(settings, create_provider_registry())

        assert isinstance(provider.clipboard, PowerShellClipboard)
        assert resolve_provider_names(settings)["clipboard"] == "powershell"

    def test_default_applies_without_override(self, test_settings):
        settings = test_settings.model_copy(
            update={"automation_provider": "custom", "clipboard_provider": None}
        )

        assert set(resolve_provider_names(settings).values()) == {"custom"}

    def test_unknown_configured_provider(self, test_settings):
        settings = test_settings.model_copy(update={"mouse_provider": "nut"})

        with pytest.raises(UnknownProviderError):
            create_automation_provider(settings, create_provider_registry())

    def test_shared_registry_shares_components(self, test_settings):
        registry = create_provider_registry()

        first = create_automation_provider(test_settings, registry)
        second = create_automation_provider(test_settings, registry)

        assert first.mouse is second.mouse
        assert first.clipboard is second.clipboard
