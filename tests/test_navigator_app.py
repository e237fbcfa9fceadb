from __future__ import annotations

import asyncio

from modal_nav.adapters.textual.app import NavigatorApp, discover_items
from modal_nav.config import NavigationSettings
from modal_nav.navigation import Mode

BRACKETED = "See [bold]notes[/bold] and [/x] here\n\nSecond block\n\nThird"


def make_app(text: str = BRACKETED) -> NavigatorApp:
    return NavigatorApp(
        discover_items(text), settings=NavigationSettings(clipboard="memory")
    )


def test_app_mounts_blocks_with_square_brackets() -> None:
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.adapter is not None
            assert len(app.query("ItemView")) == 3
            assert app.sub_title == "1/3"

    asyncio.run(scenario())


def test_app_navigates_and_yanks_raw_text() -> None:
    app = make_app()

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("v", "j")
            await pilot.pause()
            assert app.adapter is not None
            assert app.adapter.controller.mode is Mode.VISUAL
            views = list(app.query("ItemView"))
            assert views[1].has_class("-active")
            assert all(view.has_class("-selected") for view in views[:2])

            await pilot.press("y")
            await pilot.pause()
            clipboard = app.adapter.session.clipboard
            assert clipboard.text == (
                "See [bold]notes[/bold] and [/x] here\nSecond block"
            )
            assert app.adapter.controller.mode is Mode.NORMAL
            assert not any(view.has_class("-selected") for view in views)

    asyncio.run(scenario())
