"""Dispatch glue wiring the controller to renderers and the clipboard."""

from .clipboard import Clipboard, MemoryClipboard, PyperclipClipboard, create_clipboard
from .dispatcher import NavigationHooks, NavigationSession

__all__ = [
    "Clipboard",
    "MemoryClipboard",
    "PyperclipClipboard",
    "create_clipboard",
    "NavigationHooks",
    "NavigationSession",
]
