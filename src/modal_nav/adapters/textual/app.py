"""Textual app that navigates the blocks of a plain-text document."""

from __future__ import annotations

import argparse
import re
import webbrowser
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from textual import events
from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Static

from modal_nav.config import (
    CLIPBOARD_BACKENDS,
    MODE_CONFIGS,
    NavigationSettings,
    load_settings,
)
from modal_nav.navigation import (
    VISUAL_MODE_ENTERED,
    VISUAL_MODE_EXITED,
    YANK_FAILED,
    YANK_SUCCEEDED,
    Item,
    Mode,
    NavigableItem,
    SelectionRange,
)
from modal_nav.runtime import telemetry
from modal_nav.session import NavigationHooks, create_clipboard

from .controller import TextualNavAdapter, TextualUIHooks, create_default_adapter

_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
_LINK = re.compile(r"https?://\S+")

STATUS_MESSAGES = {
    VISUAL_MODE_ENTERED: "-- VISUAL --",
    VISUAL_MODE_EXITED: "",
    YANK_SUCCEEDED: "Yanked selection to clipboard",
    YANK_FAILED: "Clipboard write failed; selection kept",
}

QUIT_KEYS = {"ctrl+c", "ctrl+q"}


def discover_items(text: str) -> List[Item]:
    """Split ``text`` on blank lines; a block that is a bare URL is a link."""

    items: List[Item] = []
    for block in _BLOCK_SEPARATOR.split(text):
        stripped = block.strip()
        if not stripped:
            continue
        target = stripped if _LINK.fullmatch(stripped) else None
        items.append(Item(text=block, activation_target=target))
    return items


class ItemView(Static):
    """One navigable block."""


class NavigatorApp(App[None]):
    """Keyboard navigation over document blocks with visual-mode yank."""

    CSS = """
    #items {
        height: 1fr;
        border: round $accent;
    }

    ItemView {
        padding: 0 1;
        margin-bottom: 1;
    }

    ItemView.-selected {
        background: $primary 30%;
    }

    ItemView.-active {
        border-left: thick $warning;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        items: Sequence[Item],
        *,
        settings: Optional[NavigationSettings] = None,
    ) -> None:
        super().__init__()
        self._items = tuple(items)
        self._settings = settings or NavigationSettings()
        self._views: List[ItemView] = []
        self._status_widget: Static | None = None
        self.adapter: TextualNavAdapter | None = None
        self.logger = telemetry.get_logger("modal_nav.app")

    def compose(self) -> ComposeResult:
        yield Header()
        # Document text is shown verbatim, never parsed as Rich markup.
        self._views = [ItemView(item.text, markup=False) for item in self._items]
        yield VerticalScroll(*self._views, id="items")
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        navigation_hooks = NavigationHooks(
            active_changed=self._mark_active,
            selection_changed=self._mark_selection,
            cursor_moved=self._show_position,
            status=self._show_status,
            open_target=self._open_target,
        )
        ui_hooks = TextualUIHooks(
            update_mode=self._show_mode,
            show_pending=self._show_pending,
            log=self.logger.debug,
        )
        self.adapter = create_default_adapter(
            self._items,
            navigation_hooks=navigation_hooks,
            ui_hooks=ui_hooks,
            clipboard=create_clipboard(self._settings.clipboard),
            pending_timeout_ms=self._settings.pending_timeout_ms,
        )
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        resolution = self.adapter.handle_textual_key(
            key, text=text, modifiers=modifiers
        )
        if resolution.consumed:
            event.prevent_default()
            event.stop()

    def _mark_active(self, old_index: int, new_index: int) -> None:
        self._views[old_index].remove_class("-active")
        view = self._views[new_index]
        view.add_class("-active")
        view.scroll_visible()

    def _mark_selection(self, selection: Optional[SelectionRange]) -> None:
        for index, view in enumerate(self._views):
            view.set_class(selection is not None and index in selection, "-selected")

    def _show_position(self, item: NavigableItem) -> None:
        position = next(
            (index for index, candidate in enumerate(self._items) if candidate is item),
            -1,
        )
        self.sub_title = f"{position + 1}/{len(self._items)}"

    def _show_status(self, event: str) -> None:
        if self._status_widget:
            self._status_widget.update(STATUS_MESSAGES.get(event, event))
        if event == YANK_FAILED:
            self.bell()

    def _show_mode(self, mode: Mode) -> None:
        config = MODE_CONFIGS[mode]
        self.title = f"modal-nav [{config.label}]"
        if self._status_widget:
            self._status_widget.styles.color = config.color

    def _show_pending(self, pending: str) -> None:
        if pending and self._status_widget:
            self._status_widget.update(pending)

    def _open_target(self, target: str) -> None:
        if not webbrowser.open(target):
            self._show_status(f"Could not open {target}")

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key in QUIT_KEYS:
            return None
        if event.character and len(event.character) == 1 and event.is_printable:
            return (event.character, event.character, ())
        *modifiers, key = event.key.split("+")
        return (key, None, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="Navigate and yank the blocks of a text document."
    )
    parser.add_argument("path", type=Path, help="Plain-text document to open")
    parser.add_argument(
        "--clipboard",
        choices=CLIPBOARD_BACKENDS,
        default=settings.clipboard,
        help="Where yanked text goes (default: system)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=settings.log_preset,
        help="telelog preset; the environment config is used when omitted",
    )
    parser.add_argument(
        "--pending-timeout-ms",
        type=int,
        default=settings.pending_timeout_ms,
        help="How long a partial key sequence waits for its next key",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = NavigationSettings(
        pending_timeout_ms=args.pending_timeout_ms,
        clipboard=args.clipboard,
        log_preset=args.log_preset,
    )
    items = discover_items(args.path.read_text(encoding="utf-8"))
    NavigatorApp(items, settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
