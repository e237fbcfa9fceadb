from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from modal_nav.navigation import (
    VISUAL_MODE_ENTERED,
    VISUAL_MODE_EXITED,
    YANK_FAILED,
    YANK_SUCCEEDED,
    Item,
    KeyCommand,
    Mode,
    NavigationController,
    SelectionRange,
)
from modal_nav.session import (
    MemoryClipboard,
    NavigationHooks,
    NavigationSession,
    PyperclipClipboard,
    create_clipboard,
)


class Recorder:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def hooks(self) -> NavigationHooks:
        return NavigationHooks(
            active_changed=lambda old, new: self.calls.append(("active", (old, new))),
            selection_changed=lambda selection: self.calls.append(
                ("selection", selection)
            ),
            cursor_moved=lambda item: self.calls.append(("cursor", item.text)),
            status=lambda event: self.calls.append(("status", event)),
            open_target=lambda target: self.calls.append(("open", target)),
        )

    def named(self, name: str) -> List[Any]:
        return [payload for kind, payload in self.calls if kind == name]


def make_session(
    *texts: str,
    clipboard: Optional[MemoryClipboard] = None,
    items: Optional[List[Item]] = None,
) -> Tuple[NavigationSession, Recorder]:
    recorder = Recorder()
    session = NavigationSession(
        NavigationController(), recorder.hooks(), clipboard=clipboard
    )
    session.load(items if items is not None else [Item(text) for text in texts])
    recorder.calls.clear()
    return session, recorder


def test_load_renders_initial_cursor() -> None:
    recorder = Recorder()
    session = NavigationSession(NavigationController(), recorder.hooks())

    session.load([Item("A"), Item("B")])

    assert recorder.calls == [
        ("selection", None),
        ("active", (0, 0)),
        ("cursor", "A"),
    ]


def test_move_updates_active_marker_and_cursor() -> None:
    session, recorder = make_session("A", "B")

    session.dispatch(KeyCommand.MOVE_DOWN)

    assert recorder.calls == [("active", (0, 1)), ("cursor", "B")]


def test_boundary_move_still_refreshes_cursor() -> None:
    session, recorder = make_session("A", "B")

    session.dispatch(KeyCommand.MOVE_UP)

    assert recorder.named("active") == [(0, 0)]
    assert recorder.named("cursor") == ["A"]


def test_visual_mode_reports_selection_and_status() -> None:
    session, recorder = make_session("A", "B", "C")

    session.dispatch(KeyCommand.ENTER_VISUAL)
    session.dispatch(KeyCommand.MOVE_DOWN)
    session.dispatch(KeyCommand.CANCEL)

    assert recorder.named("selection") == [
        SelectionRange(0, 0),
        SelectionRange(0, 1),
        None,
    ]
    assert recorder.named("status") == [VISUAL_MODE_ENTERED, VISUAL_MODE_EXITED]


def test_successful_yank_writes_clipboard_and_exits() -> None:
    clipboard = MemoryClipboard()
    session, recorder = make_session("A", " B ", "C", clipboard=clipboard)
    session.dispatch(KeyCommand.ENTER_VISUAL)
    session.dispatch(KeyCommand.MOVE_DOWN)

    result = session.dispatch(KeyCommand.YANK)

    assert result.yank is not None
    assert clipboard.writes == ["A\nB"]
    assert session.controller.mode is Mode.NORMAL
    assert recorder.named("status")[-2:] == [VISUAL_MODE_EXITED, YANK_SUCCEEDED]
    assert recorder.named("selection")[-1] is None


def test_failed_yank_keeps_selection_for_retry() -> None:
    clipboard = MemoryClipboard(fail=True)
    session, recorder = make_session("A", "B", "C", clipboard=clipboard)
    session.dispatch(KeyCommand.MOVE_DOWN)
    session.dispatch(KeyCommand.ENTER_VISUAL)
    session.dispatch(KeyCommand.MOVE_DOWN)

    session.dispatch(KeyCommand.YANK)

    controller = session.controller
    assert controller.mode is Mode.VISUAL
    assert controller.selection_anchor == 1
    assert recorder.named("status")[-1] == YANK_FAILED
    assert None not in recorder.named("selection")

    clipboard.fail = False
    session.dispatch(KeyCommand.YANK)

    assert clipboard.writes == ["B\nC"]
    assert controller.mode is Mode.NORMAL


def test_without_clipboard_host_reports_outcome() -> None:
    session, recorder = make_session("A", "B")
    session.dispatch(KeyCommand.ENTER_VISUAL)

    result = session.dispatch(KeyCommand.YANK)

    assert result.yank is not None
    assert result.yank.text == "A"
    assert session.controller.mode is Mode.VISUAL

    session.report_yank(True)

    assert session.controller.mode is Mode.NORMAL
    assert recorder.named("status")[-1] == YANK_SUCCEEDED


def test_cancel_from_yank_completion_is_safe() -> None:
    session, recorder = make_session("A", "B")
    session.dispatch(KeyCommand.ENTER_VISUAL)
    session.dispatch(KeyCommand.YANK)

    session.report_yank(True)
    session.dispatch(KeyCommand.CANCEL)

    assert session.controller.mode is Mode.NORMAL
    assert recorder.named("status").count(VISUAL_MODE_EXITED) == 1


def test_activate_opens_target_once() -> None:
    session, recorder = make_session(
        items=[Item("plain"), Item("link", activation_target="https://x")]
    )

    session.dispatch(KeyCommand.ACTIVATE)
    assert recorder.named("open") == []

    session.dispatch(KeyCommand.MOVE_DOWN)
    session.dispatch(KeyCommand.ACTIVATE)

    assert recorder.named("open") == ["https://x"]


def test_empty_items_produce_no_notifications() -> None:
    session, recorder = make_session()

    for command in KeyCommand:
        session.dispatch(command)

    assert recorder.calls == []
    assert len(session.history) == len(KeyCommand)


def test_load_empty_items_fires_no_hooks() -> None:
    recorder = Recorder()
    session = NavigationSession(NavigationController(), recorder.hooks())

    session.load([])

    assert recorder.calls == []


def test_late_report_does_not_close_new_selection() -> None:
    session, recorder = make_session("A", "B", "C")
    session.dispatch(KeyCommand.ENTER_VISUAL)
    payload = session.dispatch(KeyCommand.YANK).yank
    session.dispatch(KeyCommand.CANCEL)
    session.dispatch(KeyCommand.MOVE_DOWN)
    session.dispatch(KeyCommand.ENTER_VISUAL)
    recorder.calls.clear()

    session.report_yank(True)
    session.report_yank(True, payload)

    assert session.controller.mode is Mode.VISUAL
    assert session.controller.current_selection_range() == SelectionRange(1, 1)
    assert recorder.calls == []


def test_create_clipboard_backends() -> None:
    assert isinstance(create_clipboard("system"), PyperclipClipboard)

    memory = create_clipboard("memory")
    memory.copy("A")
    assert isinstance(memory, MemoryClipboard)
    assert memory.writes == ["A"]

    with pytest.raises(ValueError):
        create_clipboard("xsel")
