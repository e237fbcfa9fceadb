"""Cursor/selection state machine and its result types."""

from .controller import YANK_SEPARATOR, NavigationController
from .errors import ClipboardWriteFailed, InvalidStateError, NavigationError
from .items import Item, NavigableItem
from .modes import ModeHandler, NormalModeHandler, VisualModeHandler
from .results import (
    VISUAL_MODE_ENTERED,
    VISUAL_MODE_EXITED,
    YANK_FAILED,
    YANK_SUCCEEDED,
    ActivationEvent,
    ActiveChange,
    NavigationResult,
    YankPayload,
)
from .state import Direction, KeyCommand, Mode, NavigationState, SelectionRange

__all__ = [
    "NavigationController",
    "YANK_SEPARATOR",
    "NavigationError",
    "InvalidStateError",
    "ClipboardWriteFailed",
    "Item",
    "NavigableItem",
    "ModeHandler",
    "NormalModeHandler",
    "VisualModeHandler",
    "ActiveChange",
    "ActivationEvent",
    "YankPayload",
    "NavigationResult",
    "VISUAL_MODE_ENTERED",
    "VISUAL_MODE_EXITED",
    "YANK_SUCCEEDED",
    "YANK_FAILED",
    "Direction",
    "KeyCommand",
    "Mode",
    "NavigationState",
    "SelectionRange",
]
