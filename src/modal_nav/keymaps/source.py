"""Command source turning raw key events into navigation commands."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Literal, Mapping, Optional, Tuple

from modal_nav.navigation import KeyCommand

from .models import KeyStroke
from .resolver import KeymapResolver, ResolutionResult


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed over by a host."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        return KeyStroke(self.key, self.modifiers).token


@dataclass(slots=True)
class CommandResolution:
    """What ``CommandSource.feed`` made of a key."""

    status: Literal["command", "pending", "unbound", "timeout"]
    command: Optional[KeyCommand] = None
    binding_id: Optional[str] = None
    timeout_ms: Optional[int] = None

    @property
    def consumed(self) -> bool:
        """True when the host should suppress its own handling of the key."""

        return self.status in {"command", "pending"}


@dataclass
class PendingTimeout:
    deadline: float
    timeout_ms: int


class CommandSource:
    """Buffers multi-key sequences and resolves them against the keymap.

    ``flags`` is called on every key so bindings can be gated on the current
    navigation state (``visual_active``, ``has_items``).
    """

    def __init__(
        self,
        resolver: KeymapResolver,
        *,
        flags: Callable[[], Mapping[str, bool]] | None = None,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        self._resolver = resolver
        self._flags = flags or dict
        self._pending: List[str] = []
        self._timeout: Optional[PendingTimeout] = None
        self._default_timeout_ms = default_pending_timeout_ms

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def feed(self, key: KeyInput) -> CommandResolution:
        had_prefix = bool(self._pending)
        self._pending.append(key.token)
        result = self._resolver.resolve(tuple(self._pending), context=self._flags())

        if result.status == "pending":
            timeout_ms = result.timeout_ms or self._default_timeout_ms
            self._arm(timeout_ms)
            return CommandResolution(status="pending", timeout_ms=timeout_ms)

        self.reset()
        if result.status == "match":
            return self._resolution(result)

        if had_prefix:
            # An abandoned prefix must not swallow a key bound on its own.
            return self.feed(key)
        return CommandResolution(status="unbound")

    def process_timeouts(self) -> Optional[CommandResolution]:
        """Flush the pending sequence once its deadline has passed."""

        if self._timeout is None or self._timeout.deadline > time.monotonic():
            return None
        return self.force_timeout()

    def force_timeout(self) -> Optional[CommandResolution]:
        if not self._pending:
            self._timeout = None
            return None
        tokens = tuple(self._pending)
        self.reset()
        result = self._resolver.resolve(tokens, context=self._flags())
        if result.status == "match":
            return self._resolution(result)
        return CommandResolution(status="timeout")

    def reset(self) -> None:
        self._pending.clear()
        self._timeout = None

    def _arm(self, timeout_ms: int) -> None:
        self._timeout = PendingTimeout(
            deadline=time.monotonic() + timeout_ms / 1000.0,
            timeout_ms=timeout_ms,
        )

    @staticmethod
    def _resolution(result: ResolutionResult) -> CommandResolution:
        assert result.binding is not None
        return CommandResolution(
            status="command",
            command=result.binding.command,
            binding_id=result.binding.id,
        )


__all__ = ["KeyInput", "CommandResolution", "CommandSource"]
