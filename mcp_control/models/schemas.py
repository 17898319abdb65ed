"""
Pydantic Models and Schemas
===========================

Core data models for tool inputs, provider results and API responses.
Tool input models carry the validation rules applied before any provider
is called.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

# Validation limits
MAX_TEXT_LENGTH = 1000
MAX_ALLOWED_COORDINATE = 10000
MAX_SCROLL_AMOUNT = 1000
MAX_COMBINATION_KEYS = 5
MIN_HOLD_DURATION = 10
MAX_HOLD_DURATION = 10000
MAX_CLIPBOARD_LENGTH = 1_000_000

VALID_KEYS = frozenset(
    [
        # Letters
        *"abcdefghijklmnopqrstuvwxyz",
        # Numbers
        *"0123456789",
        # Special keys
        "space", "escape", "tab", "alt", "control", "shift", "right_shift",
        "command", "enter", "return", "backspace", "delete", "home", "end",
        "page_up", "page_down", "left", "up", "right", "down",
        # Function keys
        "f1", "f2", "f3", "f4", "f5", "f6", "f7", "f8", "f9", "f10", "f11", "f12",
        # Symbols
        ".", ",", "/", "\\", "[", "]", ";", "'", "`", "-", "=", "plus",
    ]
)


def validate_key(key: str) -> str:
    """Normalize a key name and check it against the allowed keys."""
    if not isinstance(key, str) or not key:
        raise ValueError("Key is required and must be a string")
    normalized = key.lower()
    if normalized not in VALID_KEYS:
        raise ValueError(f'Invalid key: "{key}". Must be one of the allowed keys.')
    return normalized


# Enums
class MouseButton(str, Enum):
    """Mouse buttons."""
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class KeyState(str, Enum):
    """Key hold state."""
    DOWN = "down"
    UP = "up"


class ImageFormat(str, Enum):
    """Screenshot output formats."""
    PNG = "png"
    JPEG = "jpeg"


# Response envelope
class ControlResponse(BaseModel):
    """Uniform result of every automation operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: Optional[Any] = Field(None, description="Operation result data")
    screenshot: Optional[str] = Field(None, description="Base64 encoded image data")
    mime_type: Optional[str] = Field(None, description="MIME type of the screenshot")

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ControlResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "ControlResponse":
        return cls(success=False, message=message)


# Geometry
class MousePosition(BaseModel):
    """Screen coordinates."""

    x: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    y: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)


class ScreenRegion(BaseModel):
    """Rectangular screen region."""

    x: int = Field(..., ge=0, le=MAX_ALLOWED_COORDINATE)
    y: int = Field(..., ge=0, le=MAX_ALLOWED_COORDINATE)
    width: int = Field(..., gt=0, le=MAX_ALLOWED_COORDINATE)
    height: int = Field(..., gt=0, le=MAX_ALLOWED_COORDINATE)


class WindowInfo(BaseModel):
    """Window title, position and size."""

    title: str
    x: int
    y: int
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)


# Mouse tool inputs
class MoveMouseInput(MousePosition):
    """Input for move_mouse."""


class ClickMouseInput(BaseModel):
    """Input for click_mouse."""

    button: MouseButton = Field(default=MouseButton.LEFT)


class ClickAtInput(MousePosition):
    """Input for click_at."""

    button: MouseButton = Field(default=MouseButton.LEFT)


class DoubleClickInput(BaseModel):
    """Input for double_click; without coordinates clicks in place."""

    x: Optional[int] = Field(None, ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    y: Optional[int] = Field(None, ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)

    @model_validator(mode="after")
    def check_pair(self) -> "DoubleClickInput":
        if (self.x is None) != (self.y is None):
            raise ValueError("x and y must be given together")
        return self

    @property
    def position(self) -> Optional[MousePosition]:
        if self.x is None or self.y is None:
            return None
        return MousePosition(x=self.x, y=self.y)


class ScrollMouseInput(BaseModel):
    """Input for scroll_mouse; positive scrolls up."""

    amount: int = Field(..., ge=-MAX_SCROLL_AMOUNT, le=MAX_SCROLL_AMOUNT)


class DragMouseInput(BaseModel):
    """Input for drag_mouse."""

    from_x: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    from_y: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    to_x: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    to_y: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    button: MouseButton = Field(default=MouseButton.LEFT)

    @property
    def start(self) -> MousePosition:
        return MousePosition(x=self.from_x, y=self.from_y)

    @property
    def end(self) -> MousePosition:
        return MousePosition(x=self.to_x, y=self.to_y)


# Keyboard tool inputs
class KeyboardInput(BaseModel):
    """Input for type_text."""

    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)


class KeyPressInput(BaseModel):
    """Input for press_key."""

    key: str

    @field_validator("key")
    @classmethod
    def check_key(cls, v: str) -> str:
        return validate_key(v)


class KeyCombination(BaseModel):
    """Input for press_key_combination, e.g. ``["control", "c"]``."""

    keys: List[str] = Field(..., min_length=1, max_length=MAX_COMBINATION_KEYS)

    @field_validator("keys")
    @classmethod
    def check_keys(cls, v: List[str]) -> List[str]:
        keys = [validate_key(key) for key in v]
        if len(set(keys)) != len(keys):
            raise ValueError("Key combination contains duplicate keys")
        return keys


class KeyHoldOperation(BaseModel):
    """Input for hold_key."""

    key: str
    state: KeyState = Field(default=KeyState.DOWN)
    duration: int = Field(default=1000, ge=0, le=MAX_HOLD_DURATION, description="Milliseconds")

    @field_validator("key")
    @classmethod
    def check_key(cls, v: str) -> str:
        return validate_key(v)

    @model_validator(mode="after")
    def check_duration(self) -> "KeyHoldOperation":
        if self.state == KeyState.DOWN and self.duration < MIN_HOLD_DURATION:
            raise ValueError(f"Hold duration must be at least {MIN_HOLD_DURATION}ms")
        return self


# Screen tool inputs
class ScreenshotOptions(BaseModel):
    """Input for get_screenshot."""

    region: Optional[ScreenRegion] = None
    format: ImageFormat = Field(default=ImageFormat.PNG)
    quality: int = Field(default=80, ge=1, le=100, description="JPEG quality")
    grayscale: bool = False
    resize_width: Optional[int] = Field(None, gt=0, le=MAX_ALLOWED_COORDINATE)
    resize_height: Optional[int] = Field(None, gt=0, le=MAX_ALLOWED_COORDINATE)


class WindowTarget(BaseModel):
    """Input for focus_window."""

    title: str = Field(..., min_length=1, max_length=512)


class ResizeWindowInput(WindowTarget):
    """Input for resize_window."""

    width: int = Field(..., gt=0, le=MAX_ALLOWED_COORDINATE)
    height: int = Field(..., gt=0, le=MAX_ALLOWED_COORDINATE)


class RepositionWindowInput(WindowTarget):
    """Input for reposition_window."""

    x: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)
    y: int = Field(..., ge=-MAX_ALLOWED_COORDINATE, le=MAX_ALLOWED_COORDINATE)


# Clipboard tool inputs
class ClipboardInput(BaseModel):
    """Input for set_clipboard_content."""

    text: str = Field(..., max_length=MAX_CLIPBOARD_LENGTH)


# API responses
class ErrorResponse(BaseModel):
    """Structured HTTP error."""

    error: str
    error_code: str
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthStatus(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy or unhealthy")
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    providers: Dict[str, str] = Field(default_factory=dict, description="Provider per component")
    sse_enabled: bool = True
    sse_clients: int = 0
