"""Cursor and selection state machine over an ordered list of items."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

from modal_nav.runtime import telemetry

from .errors import InvalidStateError
from .items import NavigableItem
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

YANK_SEPARATOR = "\n"


class NavigationController:
    """Owns the item list, active index, mode, and selection anchor.

    Operations never touch renderers or the clipboard. Each returns a
    ``NavigationResult`` describing the change so a dispatch layer can drive
    those collaborators.
    """

    def __init__(
        self,
        items: Sequence[NavigableItem] = (),
        *,
        logger_name: str = "modal_nav.navigation",
    ) -> None:
        self.logger = telemetry.get_logger(logger_name)
        self._logger_name = logger_name
        self._handlers: Dict[Mode, ModeHandler] = {
            Mode.NORMAL: NormalModeHandler(self),
            Mode.VISUAL: VisualModeHandler(self),
        }
        self.state = NavigationState()
        # Yank awaiting its clipboard outcome.
        self._pending_yank: Optional[YankPayload] = None
        self.initialize(items)

    # -- queries -------------------------------------------------------------
    @property
    def items(self) -> tuple[NavigableItem, ...]:
        return self.state.items

    @property
    def current_index(self) -> Optional[int]:
        return self.state.current_index

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def selection_anchor(self) -> Optional[int]:
        return self.state.selection_anchor

    @property
    def active_item(self) -> Optional[NavigableItem]:
        return self.state.active_item

    @property
    def handler(self) -> ModeHandler:
        return self._handlers[self.state.mode]

    def flags(self) -> Mapping[str, bool]:
        """Boolean context used to gate key bindings."""

        return {
            "visual_active": self.state.mode is Mode.VISUAL,
            "has_items": not self.state.is_empty,
        }

    def current_selection_range(self) -> SelectionRange:
        state = self.state
        if state.mode is not Mode.VISUAL or state.selection_anchor is None:
            raise InvalidStateError(
                "Selection range is only defined in visual mode",
                mode=state.mode.value,
                operation="current_selection_range",
            )
        assert state.current_index is not None
        return SelectionRange.between(state.selection_anchor, state.current_index)

    # -- lifecycle -----------------------------------------------------------
    def initialize(self, items: Sequence[NavigableItem]) -> None:
        """Adopt a new item list; the cursor returns to the first item."""

        self.state = NavigationState.for_items(items)
        self._pending_yank = None
        telemetry.record_event(
            "navigation.initialize",
            level="debug",
            data={"items": len(self.state.items)},
            logger_name=self._logger_name,
        )

    # -- operations ----------------------------------------------------------
    def move(self, direction: Direction) -> NavigationResult:
        state = self.state
        if state.current_index is None:
            return NavigationResult.noop(state.mode)

        previous = state.current_index
        # Boundaries clamp instead of wrapping; the change is still reported.
        state.current_index = state.clamp(previous + direction.step)
        result = NavigationResult(
            consumed=True,
            mode=state.mode,
            status="move",
            active=ActiveChange(previous, state.current_index),
        )
        if state.mode is Mode.VISUAL:
            result.selection = self.current_selection_range()
        return result

    def enter_visual_mode(self) -> NavigationResult:
        state = self.state
        if state.mode is Mode.VISUAL or state.current_index is None:
            return NavigationResult.noop(state.mode)

        state.mode = Mode.VISUAL
        state.selection_anchor = state.current_index
        self._record_mode_switch()
        return NavigationResult(
            consumed=True,
            mode=state.mode,
            status="visual_enter",
            selection=SelectionRange(state.current_index, state.current_index),
            notifications=(VISUAL_MODE_ENTERED,),
        )

    def exit_visual_mode(self) -> NavigationResult:
        state = self.state
        if state.mode is Mode.NORMAL:
            return NavigationResult.noop(state.mode)

        state.mode = Mode.NORMAL
        state.selection_anchor = None
        self._pending_yank = None
        self._record_mode_switch()
        return NavigationResult(
            consumed=True,
            mode=state.mode,
            status="visual_exit",
            selection_cleared=True,
            notifications=(VISUAL_MODE_EXITED,),
        )

    def activate(self) -> NavigationResult:
        state = self.state
        item = state.active_item
        if (
            item is None
            or not item.is_activatable
            or item.activation_target is None
            or state.current_index is None
        ):
            return NavigationResult.noop(state.mode)

        target = item.activation_target
        return NavigationResult(
            consumed=True,
            mode=state.mode,
            status="activate",
            activation=ActivationEvent(index=state.current_index, target=target),
        )

    def yank(self) -> YankPayload:
        """Return the selected items' text, top to bottom.

        Visual mode stays active; ``complete_yank`` decides whether to leave it
        once the clipboard write has been attempted.
        """

        if self.state.mode is not Mode.VISUAL:
            raise InvalidStateError(
                "Nothing to yank outside visual mode",
                mode=self.state.mode.value,
                operation="yank",
            )
        selection = self.current_selection_range()
        text = YANK_SEPARATOR.join(
            self.state.items[index].text.strip() for index in selection.indices()
        )
        self._pending_yank = YankPayload(text=text, range=selection)
        return self._pending_yank

    def yank_result(self) -> NavigationResult:
        payload = self.yank()
        return NavigationResult(
            consumed=True,
            mode=self.state.mode,
            status="yank",
            yank=payload,
        )

    def complete_yank(
        self, succeeded: bool, payload: Optional[YankPayload] = None
    ) -> NavigationResult:
        """Apply the clipboard outcome reported by the dispatch layer.

        The outcome belongs to ``payload`` (the most recent yank when omitted).
        It is dropped without notifications when that yank is no longer
        pending or the selection has changed since it was computed.
        """

        pending = self._pending_yank
        if (
            pending is None
            or (payload is not None and payload != pending)
            or self.current_selection_range() != pending.range
        ):
            telemetry.record_event(
                "navigation.yank.stale",
                level="debug",
                data={"succeeded": succeeded, "mode": self.state.mode.value},
                logger_name=self._logger_name,
            )
            result = NavigationResult.noop(self.state.mode)
            result.status = "yank_stale"
            return result

        telemetry.record_event(
            "navigation.yank",
            level="info" if succeeded else "warning",
            data={"succeeded": succeeded},
            logger_name=self._logger_name,
        )
        if not succeeded:
            return NavigationResult(
                consumed=True,
                mode=self.state.mode,
                status="yank_failed",
                notifications=(YANK_FAILED,),
            )

        result = self.exit_visual_mode()
        result.consumed = True
        result.status = "yank_succeeded"
        result.notifications = result.notifications + (YANK_SUCCEEDED,)
        return result

    def dispatch(self, command: KeyCommand | str) -> NavigationResult:
        """Route ``command`` through the handler for the current mode."""

        command = KeyCommand(command)
        handler = self.handler
        with telemetry.span(
            "navigation::dispatch",
            logger_name=self._logger_name,
            component="navigation",
            metadata={"command": command.value, "mode": handler.mode.value},
        ) as handle:
            result = handler.handle(command)
            handle.add_metadata("status", result.status)
        return result

    def _record_mode_switch(self) -> None:
        telemetry.record_event(
            "mode.switch",
            data={
                "mode": self.state.mode.value,
                "anchor": self.state.selection_anchor,
            },
            logger_name=self._logger_name,
        )


__all__ = ["NavigationController", "YANK_SEPARATOR"]
