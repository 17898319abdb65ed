"""
MCP Server Integration Tests
============================

Integration tests for the MCP server: tool listing, tool calls, content
conversion, resources and publishing results on the SSE transport.
"""

import json

import pytest
from mcp.types import ImageContent, TextContent

from mcp_control.exceptions import ProviderError
from mcp_control.mcp_server.server import (
    CURSOR_RESOURCE_URI,
    SCREEN_RESOURCE_URI,
    MCPControlServer,
    parse_args,
)
from mcp_control.models.schemas import ControlResponse


@pytest.fixture
def mcp_server(test_settings, mock_provider, transport) -> MCPControlServer:
    return MCPControlServer(test_settings, provider=mock_provider, transport=transport)


class TestToolListing:
    """Test MCP tool descriptions."""

    @pytest.mark.asyncio
    async def test_get_tools(self, mcp_server):
        tools = await mcp_server.get_tools()

        assert len(tools) == 21
        move_mouse = next(tool for tool in tools if tool.name == "move_mouse")
        assert move_mouse.inputSchema["type"] == "object"
        assert "x" in move_mouse.inputSchema["properties"]
        assert move_mouse.annotations.readOnlyHint is False


class TestToolCalls:
    """Test tool execution through the MCP server."""

    @pytest.mark.asyncio
    async def test_call_tool_returns_json_text(self, mcp_server):
        content = await mcp_server.call_tool("get_cursor_position", {})

        assert len(content) == 1
        assert isinstance(content[0], TextContent)
        assert json.loads(content[0].text) == {
            "success": True,
            "message": "Cursor position retrieved successfully",
            "data": {"x": 10, "y": 20},
        }

    @pytest.mark.asyncio
    async def test_screenshot_returns_image(self, mcp_server):
        content = await mcp_server.call_tool("get_screenshot", {"format": "png"})

        assert isinstance(content[0], ImageContent)
        assert content[0].data == "aGVsbG8="
        assert content[0].mimeType == "image/png"
        summary = json.loads(content[1].text)
        assert summary["success"] is True
        assert "screenshot" not in summary

    @pytest.mark.asyncio
    async def test_tool_call_emits_event(self, mcp_server, transport):
        client = transport.open_client()
        client.drain()

        await mcp_server.call_tool("move_mouse", {"x": 1, "y": 2})

        chunks = client.drain()
        assert len(chunks) == 1
        assert "event:mcp.tool.response" in chunks[0]
        payload = json.loads(chunks[0].split("data:", 1)[1])
        assert payload["tool"] == "move_mouse"
        assert payload["success"] is True
        assert payload["message"] == "move_mouse completed"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, mcp_server, transport):
        response = await mcp_server.execute_tool("launch_rocket", {})

        assert response == ControlResponse.fail("Unknown tool: launch_rocket")
        assert transport.get_replay_entries()[-1].payload["success"] is False

    @pytest.mark.asyncio
    async def test_provider_failure(self, mcp_server, mock_provider, transport):
        mock_provider.keyboard.type_text.side_effect = ProviderError("keyboard unavailable")

        content = await mcp_server.call_tool("type_text", {"text": "hello"})

        result = json.loads(content[0].text)
        assert result == {
            "success": False,
            "message": "Failed to type text: keyboard unavailable",
        }
        assert transport.get_replay_entries()[-1].payload["message"] == result["message"]

    @pytest.mark.asyncio
    async def test_without_transport(self, test_settings, mock_provider):
        server = MCPControlServer(test_settings, provider=mock_provider)

        response = await server.execute_tool("press_key", {"key": "enter"})

        assert response.success
        mock_provider.keyboard.press_key.assert_awaited_once_with("enter")

    @pytest.mark.asyncio
    async def test_failed_client_does_not_affect_tool_call(self, mcp_server, transport):
        healthy = transport.open_client()
        broken = transport.open_client()
        broken.close()

        response = await mcp_server.execute_tool("clear_clipboard")

        assert response.success
        assert transport.get_client_count() == 1
        assert any("mcp.tool.response" in chunk for chunk in healthy.drain())


class TestResources:
    """Test MCP resources."""

    @pytest.mark.asyncio
    async def test_cursor_resource(self, mcp_server):
        contents = await mcp_server.read_resource(CURSOR_RESOURCE_URI)

        assert contents[0].mime_type == "application/json"
        assert json.loads(contents[0].content) == {"x": 10, "y": 20}

    @pytest.mark.asyncio
    async def test_screen_resource(self, mcp_server):
        contents = await mcp_server.read_resource(SCREEN_RESOURCE_URI)

        assert contents[0].mime_type == "image/png"
        assert contents[0].content == b"hello"

    @pytest.mark.asyncio
    async def test_unknown_resource(self, mcp_server):
        with pytest.raises(ValueError, match="Unknown resource URI"):
            await mcp_server.read_resource("file:///etc/passwd")


class TestCommandLine:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.http is False
        assert args.host is None
        assert args.port is None

    def test_http_options(self):
        args = parse_args(["--http", "--host", "0.0.0.0", "--port", "4000"])

        assert args.http is True
        assert args.host == "0.0.0.0"
        assert args.port == 4000

