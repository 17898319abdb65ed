"""
MCP Control Server
==================

A Model Context Protocol (MCP) server exposing desktop automation primitives
(mouse, keyboard, screen, clipboard) to remote callers.

This package provides:
- MCP protocol server with automation tools
- FastAPI HTTP binding with a Server-Sent Events push channel
- Interchangeable automation providers selected through a registry
- Input validation for every tool
"""

__version__ = "1.0.0"
__author__ = "MCP Control Team"
