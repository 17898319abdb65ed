"""
MCP Server Package
==================

Model Context Protocol server exposing desktop automation tools.
"""

from .server import MCPControlServer, main

__all__ = ["MCPControlServer", "main"]
