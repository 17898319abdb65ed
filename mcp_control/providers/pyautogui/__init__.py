"""
PyAutoGUI Provider
==================

Mouse, keyboard and screen automation through PyAutoGUI.
"""

from .keyboard import PyAutoGUIKeyboard
from .mouse import PyAutoGUIMouse
from .screen import PyAutoGUIScreen

__all__ = ["PyAutoGUIKeyboard", "PyAutoGUIMouse", "PyAutoGUIScreen"]
