"""Adapter turning Textual key events into navigation commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence

from modal_nav.keymaps import (
    Binding,
    CommandResolution,
    CommandSource,
    KeyInput,
    KeymapRegistry,
    KeymapResolver,
    load_default_keymaps,
)
from modal_nav.navigation import Mode, NavigableItem, NavigationController
from modal_nav.session import Clipboard, NavigationHooks, NavigationSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Host callbacks that sit outside the navigation hooks."""

    update_mode: Callable[[Mode], None] = _noop
    show_pending: Callable[[str], None] = _noop
    # Realtime debug lines for hosts that surface them.
    log: Callable[[str], None] = _noop


class TextualNavAdapter:
    """Bridges a ``CommandSource`` and a ``NavigationSession`` for Textual."""

    def __init__(
        self,
        session: NavigationSession,
        source: CommandSource,
        hooks: Optional[TextualUIHooks] = None,
    ) -> None:
        self.session = session
        self.source = source
        self.hooks = hooks or TextualUIHooks()
        self._refresh_mode()

    @property
    def controller(self) -> NavigationController:
        return self.session.controller

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResolution:
        """Resolve one key and dispatch the command it completes, if any.

        The returned resolution's ``consumed`` flag tells the host whether to
        stop the key event from propagating.
        """

        key_input = KeyInput(key=key, text=text, modifiers=tuple(modifiers))
        self._log_state("key ->", key=key_input.token)
        resolution = self.source.feed(key_input)
        self._after_resolution(resolution)
        return resolution

    def process_timeouts(self) -> Optional[CommandResolution]:
        resolution = self.source.process_timeouts()
        if resolution is not None:
            self._log_state("timeout ->", status=resolution.status)
            self._after_resolution(resolution)
        return resolution

    def _after_resolution(self, resolution: CommandResolution) -> None:
        if resolution.command is not None:
            result = self.session.dispatch(resolution.command)
            self._log_state(
                "result <-",
                command=resolution.command.value,
                binding=resolution.binding_id,
                status=result.status,
            )
        self.hooks.show_pending(" ".join(self.source.pending_tokens))
        self._refresh_mode()

    def _refresh_mode(self) -> None:
        self.hooks.update_mode(self.controller.mode)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "mode": self.controller.mode.value,
            "index": self.controller.current_index,
            "anchor": self.controller.selection_anchor,
            "pending": " ".join(self.source.pending_tokens),
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def create_default_adapter(
    items: Sequence[NavigableItem],
    *,
    navigation_hooks: Optional[NavigationHooks] = None,
    ui_hooks: Optional[TextualUIHooks] = None,
    clipboard: Optional[Clipboard] = None,
    pending_timeout_ms: int = 1000,
    extra_bindings: Iterable[Binding] = (),
) -> TextualNavAdapter:
    """Build controller, session, default keymap, and adapter in one go."""

    registry = KeymapRegistry(logger_name="modal_nav.keymaps")
    load_default_keymaps(registry, extra_bindings=extra_bindings)
    resolver = KeymapResolver(registry, logger_name="modal_nav.keymaps")

    controller = NavigationController()
    session = NavigationSession(controller, navigation_hooks, clipboard=clipboard)
    session.load(items)
    source = CommandSource(
        resolver,
        flags=controller.flags,
        default_pending_timeout_ms=pending_timeout_ms,
    )
    return TextualNavAdapter(session, source, ui_hooks)


__all__ = ["TextualNavAdapter", "TextualUIHooks", "create_default_adapter"]
