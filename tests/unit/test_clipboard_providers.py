"""
Clipboard Provider Tests
========================

Unit tests for the pyperclip and PowerShell clipboard backends.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pyperclip
import pytest

from mcp_control.exceptions import ProviderError
from mcp_control.models.schemas import ClipboardInput
from mcp_control.providers.clipboard import PowerShellClipboard, PyperclipClipboard
from mcp_control.providers.clipboard.powershell_clipboard import CLEAR_SCRIPT, SET_SCRIPT


def make_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.returncode = returncode
    return process


class TestPyperclipClipboard:
    """Test the pyperclip backend."""

    @pytest.mark.asyncio
    async def test_get_content(self):
        backend = MagicMock()
        backend.paste.return_value = "copied text"

        response = await PyperclipClipboard(backend=backend).get_clipboard_content()

        assert response.success
        assert response.data == "copied text"

    @pytest.mark.asyncio
    async def test_set_and_clear(self):
        backend = MagicMock()
        clipboard = PyperclipClipboard(backend=backend)

        await clipboard.set_clipboard_content(ClipboardInput(text="hello"))
        await clipboard.clear_clipboard()

        assert [c.args for c in backend.copy.call_args_list] == [("hello",), ("",)]

    @pytest.mark.asyncio
    async def test_has_text(self):
        backend = MagicMock()
        backend.paste.return_value = ""

        response = await PyperclipClipboard(backend=backend).has_clipboard_text()

        assert response.data == {"has_text": False}

    @pytest.mark.asyncio
    async def test_missing_clipboard_mechanism(self):
        backend = MagicMock()
        backend.paste.side_effect = pyperclip.PyperclipException("no copy/paste mechanism")

        with pytest.raises(ProviderError, match="no copy/paste mechanism"):
            await PyperclipClipboard(backend=backend).get_clipboard_content()


class TestPowerShellClipboard:
    """Test the PowerShell backend with a mocked subprocess."""

    @pytest.mark.asyncio
    async def test_get_content_strips_trailing_newline(self):
        process = make_process(stdout=b"copied\r\n")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as spawn:
            response = await PowerShellClipboard().get_clipboard_content()

        assert response.data == "copied"
        assert spawn.call_args.args[0] == "powershell.exe"
        process.communicate.assert_awaited_once_with(None)

    @pytest.mark.asyncio
    async def test_set_content_uses_stdin(self):
        process = make_process()
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as spawn:
            await PowerShellClipboard().set_clipboard_content(ClipboardInput(text="héllo 'quoted'"))

        assert SET_SCRIPT in spawn.call_args.args
        process.communicate.assert_awaited_once_with("héllo 'quoted'".encode("utf-8"))

    @pytest.mark.asyncio
    async def test_clear(self):
        process = make_process()
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as spawn:
            response = await PowerShellClipboard().clear_clipboard()

        assert response.success
        assert CLEAR_SCRIPT in spawn.call_args.args

    @pytest.mark.asyncio
    async def test_has_text(self):
        process = make_process(stdout=b"\r\n")
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            response = await PowerShellClipboard().has_clipboard_text()

        assert response.data == {"has_text": False}

    @pytest.mark.asyncio
    async def test_executable_missing(self):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError())):
            with pytest.raises(ProviderError, match="not found"):
                await PowerShellClipboard(executable="pwsh-missing").get_clipboard_content()

    @pytest.mark.asyncio
    async def test_nonzero_exit(self):
        process = make_process(stderr=b"Access denied", returncode=1)
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ProviderError, match="Access denied"):
                await PowerShellClipboard().get_clipboard_content()

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        async def hang(*args):
            await asyncio.sleep(10)

        process = make_process()
        process.communicate = hang
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ProviderError, match="timed out"):
                await PowerShellClipboard(timeout=0.01).get_clipboard_content()

        process.kill.assert_called_once()
