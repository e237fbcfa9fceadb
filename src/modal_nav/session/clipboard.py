"""Clipboard capabilities the dispatch layer writes yanked text to."""

from __future__ import annotations

from typing import List, Optional, Protocol

import pyperclip

from modal_nav.navigation import ClipboardWriteFailed


class Clipboard(Protocol):
    def copy(self, text: str) -> None:
        """Write ``text``; raise ``ClipboardWriteFailed`` if it did not land."""
        ...


class PyperclipClipboard:
    """System clipboard through pyperclip's platform backends."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardWriteFailed(str(exc), text=text) from exc


class MemoryClipboard:
    """In-process clipboard for headless hosts and tests."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.text: Optional[str] = None
        self.writes: List[str] = []

    def copy(self, text: str) -> None:
        if self.fail:
            raise ClipboardWriteFailed("clipboard unavailable", text=text)
        self.text = text
        self.writes.append(text)


def create_clipboard(backend: str) -> Clipboard:
    if backend == "system":
        return PyperclipClipboard()
    if backend == "memory":
        return MemoryClipboard()
    raise ValueError(f"Unknown clipboard backend '{backend}'")


__all__ = ["Clipboard", "PyperclipClipboard", "MemoryClipboard", "create_clipboard"]
