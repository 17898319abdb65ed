"""
PowerShell clipboard component.

Runs ``Get-Clipboard``/``Set-Clipboard`` in a PowerShell subprocess. Works
on Windows and from WSL, where ``powershell.exe`` reaches the Windows
clipboard.
"""

import asyncio
from typing import Optional

from mcp_control.config.logging import get_logger
from mcp_control.exceptions import ProviderError
from mcp_control.models.schemas import ClipboardInput, ControlResponse
from mcp_control.providers.base import ClipboardAutomation

logger = get_logger(__name__)

GET_SCRIPT = "Get-Clipboard -Raw"
# Text arrives on stdin so it never has to be quoted into the command line
SET_SCRIPT = "[Console]::InputEncoding = [Text.Encoding]::UTF8; Set-Clipboard -Value ([Console]::In.ReadToEnd())"
CLEAR_SCRIPT = "Set-Clipboard -Value $null"


class PowerShellClipboard(ClipboardAutomation):
    def __init__(self, executable: str = "powershell.exe", timeout: float = 10.0) -> None:
        self.executable = executable
        self.timeout = timeout

    async def _run(self, script: str, stdin: Optional[str] = None) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                "-NoProfile",
                "-NonInteractive",
                "-Command",
                script,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ProviderError(f"PowerShell executable not found: {self.executable}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(stdin.encode("utf-8") if stdin is not None else None),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            process.kill()
            raise ProviderError(f"PowerShell timed out after {self.timeout}s") from e

        if process.returncode != 0:
            error = stderr.decode("utf-8", errors="replace").strip()
            logger.warning("PowerShell command failed", returncode=process.returncode, error=error)
            raise ProviderError(error or f"PowerShell exited with code {process.returncode}")

        return stdout.decode("utf-8", errors="replace")

    async def get_clipboard_content(self) -> ControlResponse:
        text = await self._run(GET_SCRIPT)
        # Get-Clipboard -Raw appends a trailing newline
        return ControlResponse.ok("Clipboard content retrieved successfully", text.rstrip("\r\n"))

    async def set_clipboard_content(self, input: ClipboardInput) -> ControlResponse:
        await self._run(SET_SCRIPT, stdin=input.text)
        return ControlResponse.ok("Clipboard content set successfully")

    async def has_clipboard_text(self) -> ControlResponse:
        text = await self._run(GET_SCRIPT)
        return ControlResponse.ok(
            "Clipboard checked successfully", {"has_text": bool(text.strip("\r\n"))}
        )

    async def clear_clipboard(self) -> ControlResponse:
        await self._run(CLEAR_SCRIPT)
        return ControlResponse.ok("Clipboard cleared successfully")
