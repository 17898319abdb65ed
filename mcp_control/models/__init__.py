"""
Data Models
===========

Pydantic models shared across the HTTP binding, tool layer and providers.
"""
