"""Per-mode command routing for the navigation controller."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

from .results import NavigationResult
from .state import Direction, KeyCommand, Mode

if TYPE_CHECKING:
    from .controller import NavigationController

Route = Callable[["NavigationController"], NavigationResult]


class ModeHandler:
    """Maps the commands a mode understands onto controller operations.

    Commands missing from ``routes`` are undefined in that mode and resolve to
    a no-op result.
    """

    mode: Mode
    routes: Dict[KeyCommand, Route] = {}

    def __init__(self, controller: "NavigationController") -> None:
        self.controller = controller

    def handles(self, command: KeyCommand) -> bool:
        return command in self.routes

    def handle(self, command: KeyCommand) -> NavigationResult:
        route = self.routes.get(command)
        if route is None:
            return NavigationResult.noop(self.mode, command=command)
        result = route(self.controller)
        result.command = command
        return result


class NormalModeHandler(ModeHandler):
    mode = Mode.NORMAL
    routes = {
        KeyCommand.MOVE_DOWN: lambda nav: nav.move(Direction.FORWARD),
        KeyCommand.MOVE_UP: lambda nav: nav.move(Direction.BACKWARD),
        KeyCommand.ACTIVATE: lambda nav: nav.activate(),
        KeyCommand.ENTER_VISUAL: lambda nav: nav.enter_visual_mode(),
    }


class VisualModeHandler(ModeHandler):
    mode = Mode.VISUAL
    routes = {
        KeyCommand.MOVE_DOWN: lambda nav: nav.move(Direction.FORWARD),
        KeyCommand.MOVE_UP: lambda nav: nav.move(Direction.BACKWARD),
        # Exiting waits for complete_yank() once the clipboard write lands.
        KeyCommand.YANK: lambda nav: nav.yank_result(),
        KeyCommand.CANCEL: lambda nav: nav.exit_visual_mode(),
    }


__all__ = ["ModeHandler", "NormalModeHandler", "VisualModeHandler"]
