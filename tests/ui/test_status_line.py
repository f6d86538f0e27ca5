"""Unit tests for the StatusLine widget."""

import pytest
from textual.app import App, ComposeResult

from quickclass.tui.widgets import StatusLine


class StatusApp(App):
    def __init__(self, timeout: float):
        super().__init__()
        self.status_timeout = timeout

    def compose(self) -> ComposeResult:
        yield StatusLine(timeout=self.status_timeout, id="status")


@pytest.mark.asyncio
async def test_show_sets_message_and_kind():
    app = StatusApp(timeout=0)
    async with app.run_test() as pilot:
        status = app.query_one("#status", StatusLine)

        status.show("Opgeslagen!", "success")
        await pilot.pause()

        assert status.message == "Opgeslagen!"
        assert status.has_class("success")

        status.show("Er is een fout opgetreden.", "error")
        await pilot.pause()

        assert status.has_class("error")
        assert not status.has_class("success")


@pytest.mark.asyncio
async def test_message_clears_after_timeout():
    app = StatusApp(timeout=0.05)
    async with app.run_test() as pilot:
        status = app.query_one("#status", StatusLine)

        status.show("Opgeslagen!", "success")
        await pilot.pause(0.3)

        assert status.message == ""
        assert not status.has_class("success")
