"""
Authentication Utilities
========================

API key validation for HTTP endpoints. Authentication is off unless
``api_key`` is configured.
"""

import hmac
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyHeader

from mcp_control.config.settings import Settings, get_settings

# API key header
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


async def validate_api_key(
    request: Request, api_key: Optional[str] = Depends(api_key_header)
) -> Optional[str]:
    """
    Validate API key.

    Args:
        request: Incoming request
        api_key: API key from header

    Returns:
        API key if valid, None when authentication is disabled

    Raises:
        HTTPException: If API key is missing or invalid
    """
    expected = get_app_settings(request).api_key
    if not expected:
        return None

    if not api_key:
        raise HTTPException(
            status_code=401, detail="API key is required", headers={"WWW-Authenticate": "ApiKey"}
        )

    if not hmac.compare_digest(api_key.encode(), expected.encode()):
        raise HTTPException(
            status_code=401, detail="Invalid API key", headers={"WWW-Authenticate": "ApiKey"}
        )

    return api_key
