"""
FastAPI HTTP Binding
====================

HTTP endpoints for remote access to the automation server.

Endpoints:
- GET /mcp/sse: Server-Sent Events stream
- GET /mcp/sse/stats: Transport statistics
- POST /mcp/tools/{tool_name}: Execute an automation tool
- GET /health: Health check endpoint
"""
