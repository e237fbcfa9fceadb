"""Key bindings: strokes, sequences, flag gates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from modal_nav.navigation import KeyCommand

KEY_ALIASES = {
    "esc": "escape",
    "<esc>": "escape",
    "return": "enter",
    "<cr>": "enter",
    "<enter>": "enter",
    "<down>": "down",
    "<up>": "up",
}


def normalize_key(key: str) -> str:
    """Lowercase named keys and fold aliases; single characters keep case."""

    cleaned = key.strip()
    if len(cleaned) <= 1:
        return cleaned
    return KEY_ALIASES.get(cleaned.lower(), cleaned.lower())


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        key = normalize_key(self.key)
        if not key:
            raise ValueError("key cannot be empty")
        mods = sorted({m.strip().lower() for m in self.modifiers if m.strip()})
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", tuple(mods))

    @property
    def token(self) -> str:
        """``ctrl+shift+J`` style token; modifiers sorted, key last."""

        return "+".join(self.modifiers + (self.key,))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]
    # How long a partial match waits for the next stroke.
    timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @classmethod
    def from_strings(cls, *keys: str, timeout_ms: int = 1000) -> "KeySequence":
        return cls(tuple(KeyStroke(key) for key in keys if key), timeout_ms)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Requires a navigation flag to be true, or false when written ``!flag``."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        negated = expr.startswith("!")
        return cls(expr.lstrip("!").strip(), not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected


def _parse_when(clauses: Iterable[WhenClause | str]) -> tuple[WhenClause, ...]:
    return tuple(
        clause if isinstance(clause, WhenClause) else WhenClause.parse(clause)
        for clause in clauses
    )


@dataclass(frozen=True, slots=True)
class Binding:
    """Key sequence that triggers a navigation command while its gates hold."""

    id: str
    sequence: KeySequence
    command: KeyCommand
    when: tuple[WhenClause, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        object.__setattr__(self, "command", KeyCommand(self.command))
        object.__setattr__(self, "when", _parse_when(self.when))

    @property
    def signature(self) -> str:
        return " ".join(self.sequence.tokens)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)

    def excludes(self, other: "Binding") -> bool:
        """True when some flag gates the two bindings in opposite directions."""

        return any(
            mine.flag == theirs.flag and mine.expected != theirs.expected
            for mine in self.when
            for theirs in other.when
        )


__all__ = [
    "KEY_ALIASES",
    "normalize_key",
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "Binding",
]
