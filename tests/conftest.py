"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
Provides test settings, SSE transports and mocked automation providers.
"""

import inspect
from typing import Any, AsyncGenerator, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from pydantic_settings import SettingsConfigDict

from mcp_control.api.sse.transport import SSETransport
from mcp_control.config.settings import Settings
from mcp_control.models.schemas import ControlResponse
from mcp_control.providers.base import (
    AutomationProvider,
    ClipboardAutomation,
    KeyboardAutomation,
    MouseAutomation,
    ScreenAutomation,
)

SCREEN_SIZE = {"width": 1920, "height": 1080}


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    __test__ = False

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"
    sse_heartbeat_interval: int = 25000

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="MCP_CONTROL_TEST_")


@pytest.fixture
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest_asyncio.fixture
async def transport() -> AsyncGenerator[SSETransport, None]:
    """Transport with a small replay buffer, closed after the test."""
    sse_transport = SSETransport(max_buffer_size=5, heartbeat_interval=25000)
    yield sse_transport
    sse_transport.close()


def _mock_component(interface: type, responses: Dict[str, Any]) -> AsyncMock:
    """AsyncMock of a provider interface whose methods succeed by default."""
    component = AsyncMock(spec=interface)
    for name, _ in inspect.getmembers(interface, inspect.isfunction):
        if name.startswith("_"):
            continue
        getattr(component, name).return_value = responses.get(
            name, ControlResponse.ok(f"{name} completed")
        )
    return component


@pytest.fixture
def mock_provider() -> AutomationProvider:
    """Automation provider with mocked components."""
    return AutomationProvider(
        keyboard=_mock_component(KeyboardAutomation, {}),
        mouse=_mock_component(
            MouseAutomation,
            {
                "get_cursor_position": ControlResponse.ok(
                    "Cursor position retrieved successfully", {"x": 10, "y": 20}
                )
            },
        ),
        screen=_mock_component(
            ScreenAutomation,
            {
                "get_screen_size": ControlResponse.ok(
                    "Screen size retrieved successfully", dict(SCREEN_SIZE)
                ),
                "get_screenshot": ControlResponse(
                    success=True,
                    message="Screenshot captured successfully",
                    data={"width": 1, "height": 1, "format": "png"},
                    screenshot="aGVsbG8=",
                    mime_type="image/png",
                ),
            },
        ),
        clipboard=_mock_component(
            ClipboardAutomation,
            {"get_clipboard_content": ControlResponse.ok("Clipboard content retrieved", "copied")},
        ),
        names={
            "keyboard": "mock",
            "mouse": "mock",
            "screen": "mock",
            "clipboard": "mock",
        },
    )


@pytest.fixture
def mock_gui() -> MagicMock:
    """Stand-in for the pyautogui module."""
    gui = MagicMock()
    gui.size.return_value = (1920, 1080)
    gui.position.return_value = (100, 200)
    return gui


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Add markers based on file paths."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        if "sse" in path:
            item.add_marker(pytest.mark.sse)
