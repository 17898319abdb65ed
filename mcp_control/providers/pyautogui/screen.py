"""PyAutoGUI screen component."""

import asyncio
import base64
import io
from typing import Any, Optional, Tuple

from PIL import Image

from mcp_control.exceptions import ProviderError, UnsupportedOperationError
from mcp_control.models.schemas import (
    ControlResponse,
    ImageFormat,
    ScreenshotOptions,
    WindowInfo,
)
from mcp_control.providers.base import ScreenAutomation

from .backend import PyAutoGUIComponent


def encode_image(image: Image.Image, options: ScreenshotOptions) -> Tuple[str, str]:
    """
    Apply screenshot options to an image and encode it.

    Returns:
        (base64 data, MIME type)
    """
    if options.grayscale:
        image = image.convert("L")

    if options.resize_width or options.resize_height:
        width, height = image.size
        # Keep the aspect ratio when only one dimension is given
        new_width = options.resize_width or round(width * options.resize_height / height)
        new_height = options.resize_height or round(height * options.resize_width / width)
        image = image.resize((max(1, new_width), max(1, new_height)), Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    if options.format == ImageFormat.JPEG:
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        image.save(buffer, format="JPEG", quality=options.quality)
        mime_type = "image/jpeg"
    else:
        image.save(buffer, format="PNG", optimize=True)
        mime_type = "image/png"

    return base64.b64encode(buffer.getvalue()).decode("ascii"), mime_type


class PyAutoGUIScreen(PyAutoGUIComponent, ScreenAutomation):
    async def get_screen_size(self) -> ControlResponse:
        size = await asyncio.to_thread(self.gui.size)
        return ControlResponse.ok(
            "Screen size retrieved successfully", {"width": int(size[0]), "height": int(size[1])}
        )

    async def get_active_window(self) -> ControlResponse:
        window = await asyncio.to_thread(self._window_api("getActiveWindow"))
        if window is None:
            raise ProviderError("No active window")
        return ControlResponse.ok(
            "Active window information retrieved successfully",
            self._window_info(window).model_dump(),
        )

    async def focus_window(self, title: str) -> ControlResponse:
        window = await self._find_window(title)
        await asyncio.to_thread(window.activate)
        return ControlResponse.ok(f"Focused window: {window.title}")

    async def resize_window(self, title: str, width: int, height: int) -> ControlResponse:
        window = await self._find_window(title)
        await asyncio.to_thread(window.resizeTo, width, height)
        return ControlResponse.ok(f"Resized window {window.title!r} to {width}x{height}")

    async def reposition_window(self, title: str, x: int, y: int) -> ControlResponse:
        window = await self._find_window(title)
        await asyncio.to_thread(window.moveTo, x, y)
        return ControlResponse.ok(f"Moved window {window.title!r} to ({x}, {y})")

    async def get_screenshot(self, options: Optional[ScreenshotOptions] = None) -> ControlResponse:
        options = options or ScreenshotOptions()
        region = None
        if options.region is not None:
            r = options.region
            region = (r.x, r.y, r.width, r.height)

        image = await asyncio.to_thread(self.gui.screenshot, region=region)
        data, mime_type = await asyncio.to_thread(encode_image, image, options)

        return ControlResponse(
            success=True,
            message="Screenshot captured successfully",
            data={"width": image.width, "height": image.height, "format": options.format.value},
            screenshot=data,
            mime_type=mime_type,
        )

    def _window_api(self, name: str) -> Any:
        # Window management only exists where PyGetWindow supports the platform
        func = getattr(self.gui, name, None)
        if func is None:
            raise UnsupportedOperationError("Window management is not supported on this platform")
        return func

    async def _find_window(self, title: str) -> Any:
        windows = await asyncio.to_thread(self._window_api("getWindowsWithTitle"), title)
        if not windows:
            raise ProviderError(f"Window not found: {title}")
        return windows[0]

    @staticmethod
    def _window_info(window: Any) -> WindowInfo:
        return WindowInfo(
            title=window.title,
            x=window.left,
            y=window.top,
            width=window.width,
            height=window.height,
        )
