"""Dispatch glue between the navigation controller and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from modal_nav.navigation import (
    ClipboardWriteFailed,
    KeyCommand,
    NavigableItem,
    NavigationController,
    NavigationResult,
    SelectionRange,
    YankPayload,
)
from modal_nav.runtime import telemetry

from .clipboard import Clipboard


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class NavigationHooks:
    """Renderer, status, and link-opening callbacks.

    ``selection_changed`` receives ``None`` when the selection is cleared.
    """

    active_changed: Callable[[int, int], None] = _noop
    selection_changed: Callable[[Optional[SelectionRange]], None] = _noop
    cursor_moved: Callable[[NavigableItem], None] = _noop
    status: Callable[[str], None] = _noop
    open_target: Callable[[str], None] = _noop


class NavigationSession:
    """Feeds commands to the controller and replays results into hooks.

    When a clipboard is configured the session writes yanked text itself and
    reports the outcome back to the controller. Without one, the host writes
    the payload and calls ``report_yank`` when the write settles.
    """

    def __init__(
        self,
        controller: NavigationController,
        hooks: Optional[NavigationHooks] = None,
        *,
        clipboard: Optional[Clipboard] = None,
    ) -> None:
        self.controller = controller
        self.hooks = hooks or NavigationHooks()
        self.clipboard = clipboard
        self.logger = telemetry.get_logger("modal_nav.session")
        self.history: List[NavigationResult] = []

    def load(self, items: Sequence[NavigableItem]) -> None:
        """Replace the item list and render the initial cursor."""

        self.controller.initialize(items)
        index = self.controller.current_index
        if index is not None:
            self.hooks.selection_changed(None)
            self.hooks.active_changed(index, index)
            self.hooks.cursor_moved(self.controller.items[index])

    def dispatch(self, command: KeyCommand | str) -> NavigationResult:
        result = self.controller.dispatch(command)
        self._replay(result)
        if result.yank is not None and self.clipboard is not None:
            try:
                self.clipboard.copy(result.yank.text)
            except ClipboardWriteFailed as exc:
                self.logger.warning(f"clipboard write failed: {exc}")
                self.report_yank(False, result.yank)
            else:
                self.report_yank(True, result.yank)
        return result

    def report_yank(
        self, succeeded: bool, payload: Optional[YankPayload] = None
    ) -> NavigationResult:
        """Finish a yank; visual mode is left only when the write succeeded.

        Pass the ``YankPayload`` that was written so a late outcome cannot
        close a selection made after it.
        """

        result = self.controller.complete_yank(succeeded, payload)
        self._replay(result)
        return result

    def _replay(self, result: NavigationResult) -> None:
        self.history.append(result)
        if not result.changed:
            return

        hooks = self.hooks
        if result.active is not None:
            hooks.active_changed(result.active.old_index, result.active.new_index)
            hooks.cursor_moved(self.controller.items[result.active.new_index])
        if result.selection is not None:
            hooks.selection_changed(result.selection)
        elif result.selection_cleared:
            hooks.selection_changed(None)
        for event in result.notifications:
            hooks.status(event)
        if result.activation is not None:
            hooks.open_target(result.activation.target)


__all__ = ["NavigationHooks", "NavigationSession"]
