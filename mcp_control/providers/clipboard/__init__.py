"""
Clipboard Providers
===================

Clipboard backends:
- pyperclip: cross-platform clipboard access
- powershell: Get-Clipboard/Set-Clipboard through PowerShell (Windows, WSL)
"""

from .powershell_clipboard import PowerShellClipboard
from .pyperclip_clipboard import PyperclipClipboard

__all__ = ["PowerShellClipboard", "PyperclipClipboard"]
