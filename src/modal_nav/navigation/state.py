"""Mode, direction, and index state tracked by the navigation controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence

from .items import NavigableItem


class Mode(str, Enum):
    """Available navigation modes."""

    NORMAL = "normal"
    VISUAL = "visual"


class Direction(Enum):
    BACKWARD = -1
    FORWARD = 1

    @property
    def step(self) -> int:
        return self.value


class KeyCommand(str, Enum):
    """Discrete commands produced by the command source."""

    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    ENTER_VISUAL = "enter_visual"
    ACTIVATE = "activate"
    YANK = "yank"
    CANCEL = "cancel"


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Inclusive ``[start, end]`` index range with ``start <= end``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"SelectionRange start {self.start} is after end {self.end}"
            )

    @classmethod
    def between(cls, anchor: int, cursor: int) -> "SelectionRange":
        return cls(min(anchor, cursor), max(anchor, cursor))

    def indices(self) -> range:
        return range(self.start, self.end + 1)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index <= self.end

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices())

    def __len__(self) -> int:
        return self.end - self.start + 1


@dataclass(slots=True)
class NavigationState:
    """Mutable cursor, mode, and anchor for one item list."""

    items: tuple[NavigableItem, ...] = ()
    current_index: Optional[int] = None
    mode: Mode = Mode.NORMAL
    selection_anchor: Optional[int] = None

    @classmethod
    def for_items(cls, items: Sequence[NavigableItem]) -> "NavigationState":
        frozen = tuple(items)
        return cls(items=frozen, current_index=0 if frozen else None)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def last_index(self) -> int:
        return len(self.items) - 1

    def clamp(self, index: int) -> int:
        return max(0, min(index, self.last_index))

    @property
    def active_item(self) -> Optional[NavigableItem]:
        if self.current_index is None:
            return None
        return self.items[self.current_index]


__all__ = [
    "Mode",
    "Direction",
    "KeyCommand",
    "SelectionRange",
    "NavigationState",
]
