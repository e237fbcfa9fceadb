"""Result objects describing what a controller operation changed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import KeyCommand, Mode, SelectionRange

VISUAL_MODE_ENTERED = "visual-mode-entered"
VISUAL_MODE_EXITED = "visual-mode-exited"
YANK_SUCCEEDED = "yank-succeeded"
YANK_FAILED = "yank-failed"


@dataclass(frozen=True, slots=True)
class ActiveChange:
    """Previous and new active index; equal when a move hit a boundary."""

    old_index: int
    new_index: int

    @property
    def moved(self) -> bool:
        return self.old_index != self.new_index


@dataclass(frozen=True, slots=True)
class ActivationEvent:
    index: int
    target: str


@dataclass(frozen=True, slots=True)
class YankPayload:
    """Text computed from a selection, ready for a clipboard write."""

    text: str
    range: SelectionRange


@dataclass(slots=True)
class NavigationResult:
    """Returned from every ``NavigationController`` operation."""

    consumed: bool
    mode: Mode
    status: str = "ok"
    command: Optional[KeyCommand] = None
    active: Optional[ActiveChange] = None
    selection: Optional[SelectionRange] = None
    selection_cleared: bool = False
    notifications: tuple[str, ...] = ()
    activation: Optional[ActivationEvent] = None
    yank: Optional[YankPayload] = None

    @property
    def changed(self) -> bool:
        return bool(
            self.active
            or self.selection
            or self.selection_cleared
            or self.notifications
            or self.activation
            or self.yank
        )

    @classmethod
    def noop(
        cls, mode: Mode, *, command: Optional[KeyCommand] = None
    ) -> "NavigationResult":
        return cls(consumed=False, mode=mode, status="noop", command=command)


__all__ = [
    "VISUAL_MODE_ENTERED",
    "VISUAL_MODE_EXITED",
    "YANK_SUCCEEDED",
    "YANK_FAILED",
    "ActiveChange",
    "ActivationEvent",
    "YankPayload",
    "NavigationResult",
]
