"""Built-in key bindings for the navigation commands."""

from __future__ import annotations

from typing import Iterable

from modal_nav.navigation import KeyCommand

from .models import Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_KEYS: tuple[tuple[str, KeyCommand], ...] = (
    ("j", KeyCommand.MOVE_DOWN),
    ("down", KeyCommand.MOVE_DOWN),
    ("k", KeyCommand.MOVE_UP),
    ("up", KeyCommand.MOVE_UP),
    ("v", KeyCommand.ENTER_VISUAL),
    ("enter", KeyCommand.ACTIVATE),
    ("y", KeyCommand.YANK),
    ("escape", KeyCommand.CANCEL),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding(f"{command.value}.{key}", KeySequence.from_strings(key), command)
    for key, command in DEFAULT_KEYS
)


def load_default_keymaps(
    registry: KeymapRegistry, *, extra_bindings: Iterable[Binding] = ()
) -> None:
    """Register the built-in bindings, then ``extra_bindings`` on top.

    Extra bindings replace any default they collide with.
    """

    for binding in DEFAULT_BINDINGS:
        registry.add(binding)
    for binding in extra_bindings:
        registry.add(binding, replace=True)


__all__ = ["DEFAULT_KEYS", "DEFAULT_BINDINGS", "load_default_keymaps"]
