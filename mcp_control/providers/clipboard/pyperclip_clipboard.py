"""Clipboard component backed by pyperclip."""

import asyncio
from typing import Any

import pyperclip

from mcp_control.exceptions import ProviderError
from mcp_control.models.schemas import ClipboardInput, ControlResponse
from mcp_control.providers.base import ClipboardAutomation


class PyperclipClipboard(ClipboardAutomation):
    def __init__(self, backend: Any = None) -> None:
        self._clip = backend or pyperclip

    async def _read(self) -> str:
        try:
            return await asyncio.to_thread(self._clip.paste) or ""
        except pyperclip.PyperclipException as e:
            raise ProviderError(str(e)) from e

    async def _write(self, text: str) -> None:
        try:
            await asyncio.to_thread(self._clip.copy, text)
        except pyperclip.PyperclipException as e:
            raise ProviderError(str(e)) from e

    async def get_clipboard_content(self) -> ControlResponse:
        text = await self._read()
        return ControlResponse.ok("Clipboard content retrieved successfully", text)

    async def set_clipboard_content(self, input: ClipboardInput) -> ControlResponse:
        await self._write(input.text)
        return ControlResponse.ok("Clipboard content set successfully")

    async def has_clipboard_text(self) -> ControlResponse:
        text = await self._read()
        return ControlResponse.ok("Clipboard checked successfully", {"has_text": bool(text)})

    async def clear_clipboard(self) -> ControlResponse:
        await self._write("")
        return ControlResponse.ok("Clipboard cleared successfully")
