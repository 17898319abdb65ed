"""
Application Settings
===================

Main application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json
from pathlib import Path


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="MCP Control", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server Configuration
    transport: str = Field(default="stdio", description="MCP transport: stdio or http")
    host: str = Field(default="127.0.0.1", description="HTTP server host")
    port: int = Field(default=3232, ge=1, le=65535, description="HTTP server port")

    # Provider Configuration
    automation_provider: str = Field(default="pyautogui", description="Default automation provider")
    keyboard_provider: Optional[str] = Field(default=None, description="Keyboard provider override")
    mouse_provider: Optional[str] = Field(default=None, description="Mouse provider override")
    screen_provider: Optional[str] = Field(default=None, description="Screen provider override")
    clipboard_provider: Optional[str] = Field(
        default="pyperclip", description="Clipboard provider override"
    )

    # Security Configuration
    allowed_hosts: List[str] = Field(default=["localhost"], description="Allowed origins for CORS")
    api_key: Optional[str] = Field(default=None, description="API key; authentication is off if unset")

    # SSE Configuration
    sse_enabled: bool = Field(default=True, description="Enable Server-Sent Events")
    sse_path: str = Field(default="/mcp/sse", description="SSE streaming endpoint path")
    sse_max_clients: int = Field(default=100, ge=1, description="Maximum SSE connections")
    sse_max_buffer_size: int = Field(default=100, ge=0, description="SSE replay buffer size")
    sse_heartbeat_interval: int = Field(
        default=25000, gt=0, description="SSE heartbeat interval in milliseconds"
    )
    sse_retry_interval: int = Field(
        default=3000, gt=0, description="Client reconnection hint in milliseconds"
    )
    sse_client_queue_size: int = Field(
        default=1000, gt=0, description="Pending chunks allowed per SSE client"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(default=False, description="Write rotating log files")
    log_dir: Path = Field(default=Path("./logs"), description="Log file directory")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate transport value."""
        allowed = {"stdio", "http"}
        if v.lower() not in allowed:
            raise ValueError(f"Transport must be one of: {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("sse_path")
    @classmethod
    def validate_sse_path(cls, v: str) -> str:
        """Ensure the SSE path is absolute."""
        if not v.startswith("/"):
            raise ValueError("SSE path must start with '/'")
        return v.rstrip("/") or "/"

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse allowed hosts from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["*"] or ["host1", "host2"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "*" or "host1,host2"
            return [host.strip() for host in v.split(",") if host.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="MCP_CONTROL_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings
