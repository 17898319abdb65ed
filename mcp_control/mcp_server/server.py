"""
MCP Server Implementation
=========================

Model Context Protocol server exposing desktop automation tools.

Tool calls are dispatched to the tool layer; every result is also published
as an ``mcp.tool.response`` event when an SSE transport is present. The
server runs over stdio, or over HTTP with the FastAPI application and its
event stream.
"""

import argparse
import asyncio
import base64
import json
import time
from typing import Any, Dict, List, Optional, Sequence, Union

from mcp.server import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.types import (
    ImageContent,
    LoggingLevel,
    Resource,
    TextContent,
    Tool,
    ToolAnnotations,
)

from mcp_control import __version__
from mcp_control.api.sse.events import SSEEventType, create_tool_response_payload
from mcp_control.api.sse.transport import SSETransport
from mcp_control.config.logging import get_logger
from mcp_control.config.settings import Settings, get_settings
from mcp_control.models.schemas import ControlResponse
from mcp_control.providers import (
    AutomationProvider,
    ProviderRegistry,
    create_automation_provider,
    create_provider_registry,
)
from mcp_control.tools import ALL_TOOLS, get_tool, run_tool

logger = get_logger(__name__)

SERVER_NAME = "mcp-control"

SCREEN_RESOURCE_URI = "screen://current"
CURSOR_RESOURCE_URI = "cursor://position"

ToolContent = Union[TextContent, ImageContent]


class MCPControlServer:
    """MCP server for mouse, keyboard, screen and clipboard automation."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[AutomationProvider] = None,
        transport: Optional[SSETransport] = None,
        registry: Optional[ProviderRegistry] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.registry = registry or create_provider_registry()
        self.provider = provider or create_automation_provider(self.settings, self.registry)
        self.transport = transport
        self.logger: Any = logger.bind(component="mcp_server")
        self.server = Server(SERVER_NAME)
        self._setup_tools()
        self._setup_resources()
        self._setup_handlers()

    def _setup_tools(self) -> None:
        """Setup MCP tools."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            return self.get_tool_list()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[ToolContent]:
            return await self.call_tool(name, arguments)

    def _setup_resources(self) -> None:
        """Setup MCP resources."""

        @self.server.list_resources()
        async def handle_list_resources() -> List[Resource]:
            return [
                Resource(
                    uri=SCREEN_RESOURCE_URI,  # type: ignore[arg-type]
                    name="Current Screen",
                    description="The current screen display",
                    mimeType="image/png",
                ),
                Resource(
                    uri=CURSOR_RESOURCE_URI,  # type: ignore[arg-type]
                    name="Cursor Position",
                    description="Current cursor coordinates",
                    mimeType="application/json",
                ),
            ]

        @self.server.read_resource()
        async def handle_read_resource(uri: Any) -> List[ReadResourceContents]:
            return await self.read_resource(str(uri).rstrip("/"))

    def _setup_handlers(self) -> None:
        """Setup additional MCP handlers."""

        @self.server.set_logging_level()
        async def handle_set_logging_level(level: LoggingLevel) -> None:
            self.logger.info("Logging level changed", level=level)

    # Public API

    def get_tool_list(self) -> List[Tool]:
        """MCP descriptions of every tool."""
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
                annotations=ToolAnnotations(readOnlyHint=tool.read_only),
            )
            for tool in ALL_TOOLS
        ]

    async def get_tools(self) -> List[Tool]:
        return self.get_tool_list()

    async def execute_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> ControlResponse:
        """
        Run a tool and publish its result.

        Returns the tool's response envelope; unknown tools produce a
        failure envelope rather than an exception.
        """
        self.logger.info("Tool called", tool=name)
        start_time = time.time()

        tool = get_tool(name)
        if tool is None:
            self.logger.error("Tool not found", tool=name)
            response = ControlResponse.fail(f"Unknown tool: {name}")
        else:
            response = await run_tool(tool, self.provider, arguments)

        self._publish_result(name, response, time.time() - start_time)
        return response

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> List[ToolContent]:
        """Run a tool and convert the envelope to MCP content."""
        response = await self.execute_tool(name, arguments)
        return self.to_content(response)

    async def read_resource(self, uri: str) -> List[ReadResourceContents]:
        """
        Read one of the server resources.

        Raises:
            ValueError: If the URI is unknown or the provider call fails
        """
        if uri == SCREEN_RESOURCE_URI:
            response = await self.provider.screen.get_screenshot()
            if not response.screenshot:
                raise ValueError(f"Failed to read {uri}: {response.message}")
            return [
                ReadResourceContents(
                    content=base64.b64decode(response.screenshot),
                    mime_type=response.mime_type or "image/png",
                )
            ]
        elif uri == CURSOR_RESOURCE_URI:
            response = await self.provider.mouse.get_cursor_position()
            return [
                ReadResourceContents(
                    content=json.dumps(response.data), mime_type="application/json"
                )
            ]
        else:
            raise ValueError(f"Unknown resource URI: {uri}")

    @staticmethod
    def to_content(response: ControlResponse) -> List[ToolContent]:
        """Screenshots become image content; everything else JSON text."""
        if response.screenshot:
            summary = response.model_dump(mode="json", exclude={"screenshot"}, exclude_none=True)
            return [
                ImageContent(
                    type="image",
                    data=response.screenshot,
                    mimeType=response.mime_type or "image/png",
                ),
                TextContent(type="text", text=json.dumps(summary, indent=2)),
            ]

        return [
            TextContent(
                type="text",
                text=json.dumps(response.model_dump(mode="json", exclude_none=True), indent=2),
            )
        ]

    def _publish_result(self, name: str, response: ControlResponse, execution_time: float) -> None:
        if self.transport is None:
            return
        payload = create_tool_response_payload(
            name,
            response.success,
            response.message,
            execution_time=round(execution_time, 4),
        )
        self.transport.emit_event(SSEEventType.TOOL_RESPONSE.value, payload)

    async def run(
        self,
        transport_type: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        """Run the MCP server."""
        transport_type = transport_type or self.settings.transport
        host = host or self.settings.host
        port = port or self.settings.port

        try:
            if transport_type == "stdio":
                from mcp.server.stdio import stdio_server

                async with stdio_server() as (read_stream, write_stream):
                    self.logger.info("MCP server starting with stdio transport")
                    await self.server.run(
                        read_stream,
                        write_stream,
                        InitializationOptions(
                            server_name=SERVER_NAME,
                            server_version=__version__,
                            capabilities=self.server.get_capabilities(
                                notification_options=NotificationOptions(),
                                experimental_capabilities={},
                            ),
                        ),
                    )
            elif transport_type == "http":
                import uvicorn

                from mcp_control.api.main import create_app

                if self.transport is None:
                    self.transport = SSETransport.from_settings(self.settings)
                app = create_app(self.settings, transport=self.transport, server=self)

                self.logger.info("MCP server starting with HTTP transport", host=host, port=port)
                config = uvicorn.Config(
                    app,
                    host=host,
                    port=port,
                    log_config=None,
                    access_log=self.settings.debug,
                )
                await uvicorn.Server(config).serve()
            else:
                raise ValueError(f"Unsupported transport type: {transport_type}")

        except Exception as e:
            self.logger.error("MCP server error", error=str(e))
            raise


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mcp-control", description="Desktop automation MCP server"
    )
    parser.add_argument(
        "--http", action="store_true", help="Serve over HTTP with an SSE event stream"
    )
    parser.add_argument("--host", default=None, help="HTTP bind address")
    parser.add_argument("--port", type=int, default=None, help="HTTP port")
    return parser.parse_args(argv)


async def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for MCP server."""
    args = parse_args(argv)
    settings = get_settings()
    transport_type = "http" if args.http else settings.transport

    server = MCPControlServer(settings)
    await server.run(transport_type=transport_type, host=args.host, port=args.port)


def cli() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("MCP server stopped")


if __name__ == "__main__":
    cli()
