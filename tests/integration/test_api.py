"""
API Integration Tests
=====================

Integration tests for the FastAPI application:
- Health and SSE statistics endpoints
- Tool execution over HTTP and the resulting SSE events
- API key enforcement
- Lifespan management of the SSE transport
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from mcp_control.api.main import create_app
from mcp_control.api.sse.transport import SSETransport
from mcp_control.mcp_server.server import MCPControlServer


@pytest.fixture
def sse_transport() -> Generator[SSETransport, None, None]:
    sse_transport = SSETransport(max_buffer_size=5)
    yield sse_transport
    sse_transport.close()


@pytest.fixture
def server(test_settings, mock_provider, sse_transport) -> MCPControlServer:
    return MCPControlServer(test_settings, provider=mock_provider, transport=sse_transport)


@pytest.fixture
def client(test_settings, server) -> Generator[TestClient, None, None]:
    app = create_app(test_settings, server=server)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def secured_client(test_settings, server) -> Generator[TestClient, None, None]:
    settings = test_settings.model_copy(update={"api_key": "secret-key"})
    app = create_app(settings, server=server)
    with TestClient(app) as test_client:
        yield test_client


class TestHealthEndpoints:
    """Test health and statistics endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["providers"]["mouse"] == "mock"
        assert data["sse_enabled"] is True
        assert data["sse_clients"] == 0
        assert "X-Request-ID" in response.headers

    def test_sse_stats(self, client):
        response = client.get("/mcp/sse/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["path"] == "/mcp/sse"
        assert data["attached"] is True
        assert data["max_buffer_size"] == 5
        assert data["connected_clients"] == 0

    def test_heartbeat_runs_during_lifespan(self, test_settings, server, sse_transport):
        app = create_app(test_settings, server=server)

        with TestClient(app):
            assert sse_transport.heartbeat_running

        assert sse_transport.closed
        assert not sse_transport.heartbeat_running

    def test_closed_transport_refuses_stream(self, client, sse_transport):
        sse_transport.close()

        response = client.get("/mcp/sse")

        assert response.status_code == 503
        assert response.json()["success"] is False
        assert client.get("/health").json()["status"] == "unhealthy"

    def test_sse_disabled(self, test_settings, mock_provider):
        settings = test_settings.model_copy(update={"sse_enabled": False})
        server = MCPControlServer(settings, provider=mock_provider)

        with TestClient(create_app(settings, server=server)) as test_client:
            assert test_client.get("/mcp/sse").status_code == 404
            assert test_client.get("/health").json()["sse_enabled"] is False


class TestToolEndpoints:
    """Test tool execution over HTTP."""

    def test_list_tools(self, client):
        response = client.get("/mcp/tools")

        assert response.status_code == 200
        names = [tool["name"] for tool in response.json()]
        assert len(names) == 21
        assert "get_screenshot" in names

    def test_call_tool(self, client, mock_provider, sse_transport):
        response = client.post("/mcp/tools/move_mouse", json={"x": 10, "y": 20})

        assert response.status_code == 200
        assert response.json()["success"] is True
        mock_provider.mouse.move_mouse.assert_awaited_once()

        event = sse_transport.get_replay_entries()[-1]
        assert event.event_name == "mcp.tool.response"
        assert event.payload["tool"] == "move_mouse"
        assert event.payload["success"] is True

    def test_call_tool_without_body(self, client):
        response = client.post("/mcp/tools/get_cursor_position")

        assert response.status_code == 200
        assert response.json()["data"] == {"x": 10, "y": 20}

    def test_invalid_arguments_return_failure_envelope(self, client, sse_transport):
        response = client.post("/mcp/tools/scroll_mouse", json={"amount": 5000})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["message"].startswith("Failed to scroll mouse: Invalid input")
        assert sse_transport.get_replay_entries()[-1].payload["success"] is False

    def test_unknown_tool(self, client):
        response = client.post("/mcp/tools/launch_rocket", json={})

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Unknown tool: launch_rocket"
        assert data["error_code"] == "404"


class TestAPIKey:
    """Test API key enforcement."""

    def test_stream_requires_key(self, secured_client):
        response = secured_client.get("/mcp/sse")

        assert response.status_code == 401
        assert response.json()["error"] == "API key is required"

    def test_invalid_key(self, secured_client):
        response = secured_client.get("/mcp/sse/stats", headers={"X-API-Key": "wrong"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid API key"

    def test_valid_key(self, secured_client):
        response = secured_client.post(
            "/mcp/tools/click_mouse", json={}, headers={"X-API-Key": "secret-key"}
        )

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_health_is_public(self, secured_client):
        assert secured_client.get("/health").status_code == 200
