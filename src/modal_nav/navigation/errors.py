"""Exceptions raised by the navigation core and its clipboard collaborators."""

from __future__ import annotations

from typing import Optional


class NavigationError(RuntimeError):
    """Base class for navigation failures."""


class InvalidStateError(NavigationError):
    """Raised when a Visual-only operation runs outside Visual mode."""

    def __init__(
        self,
        message: str,
        *,
        mode: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.mode = mode
        self.operation = operation


class ClipboardWriteFailed(NavigationError):
    """Raised by clipboard capabilities when the write did not happen."""

    def __init__(self, message: str, *, text: Optional[str] = None) -> None:
        super().__init__(message)
        self.text = text


__all__ = ["NavigationError", "InvalidStateError", "ClipboardWriteFailed"]
