"""UI tests for the class manager screen.

Drive the screen through its actions and buttons with Textual's pilot,
using an AsyncMock gateway in place of the backend.
"""

import pytest
from textual.app import App
from textual.widgets import Button, Input, TextArea

from quickclass.models.class_entry import ClassEntry
from quickclass.services.class_store import ClassStore
from quickclass.services.exceptions import TransportError
from quickclass.tui.screens import ClassManagerScreen, ConfirmDialog, ImportDialog
from quickclass.tui.widgets import ClassRow, StatusLine


class ManagerTestApp(App):
    """Minimal app hosting a ClassManagerScreen."""

    def __init__(self, store: ClassStore, gateway):
        super().__init__()
        self.store = store
        self.gateway = gateway

    def on_mount(self) -> None:
        self.push_screen(ClassManagerScreen(self.store, self.gateway, status_timeout=0))


def rows_of(app) -> list[ClassRow]:
    return list(app.screen.query(ClassRow))


def status_of(app) -> StatusLine:
    return app.screen.query_one("#status", StatusLine)


@pytest.mark.asyncio
async def test_renders_first_page(numbered_classes, gateway):
    app = ManagerTestApp(ClassStore(numbered_classes(30)), gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        rows = rows_of(app)
        assert len(rows) == 25
        assert rows[0].read_entry() == ClassEntry(class_name="cls-0", description="Entry 0")
        assert app.screen.query_one("#prev-page", Button).disabled is True
        assert app.screen.query_one("#next-page", Button).disabled is False


@pytest.mark.asyncio
async def test_edits_survive_page_navigation(numbered_classes, gateway):
    store = ClassStore(numbered_classes(30))
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()
        screen = app.screen

        await screen.action_next_page()
        await pilot.pause()

        rows = rows_of(app)
        assert len(rows) == 5
        assert rows[1].global_index == 26

        rows[1].query_one(".row-class", Input).value = "edited"
        await screen.action_prev_page()
        await pilot.pause()

        assert store.current_page == 1
        assert store.entries[26].class_name == "edited"
        assert screen.query_one("#next-page", Button).disabled is False


@pytest.mark.asyncio
async def test_add_entry_focuses_new_row(gateway):
    store = ClassStore()
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()
        assert rows_of(app) == []

        await app.screen.action_add_entry()
        await pilot.pause()

        rows = rows_of(app)
        assert len(rows) == 1
        assert store.entries == [ClassEntry()]
        assert app.focused is rows[0].query_one(".row-class", Input)


@pytest.mark.asyncio
async def test_delete_after_confirmation(sample_classes, gateway):
    store = ClassStore(sample_classes)
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        rows_of(app)[1].focus_class_input()
        await pilot.pause()
        app.screen.action_delete_focused()
        await pilot.pause()

        assert isinstance(app.screen, ConfirmDialog)
        app.screen.query_one("#confirm-yes", Button).press()
        await pilot.pause()
        await pilot.pause()
        await pilot.pause()

        assert [e.class_name for e in store.entries] == ["btn-red", "wide", "shadow"]
        assert len(rows_of(app)) == 3


@pytest.mark.asyncio
async def test_delete_cancelled_keeps_entry(sample_classes, gateway):
    store = ClassStore(sample_classes)
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        rows_of(app)[0].query_one(".row-delete", Button).press()
        await pilot.pause()

        assert isinstance(app.screen, ConfirmDialog)
        await pilot.press("escape")
        await pilot.pause()

        assert len(store.entries) == 4


@pytest.mark.asyncio
async def test_move_down_reorders_rows(sample_classes, gateway):
    store = ClassStore(sample_classes)
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        rows_of(app)[0].focus_class_input()
        await pilot.pause()
        await app.screen.action_move_down()
        await pilot.pause()

        assert [e.class_name for e in store.entries][:2] == ["btn-blue", "btn-red"]
        assert rows_of(app)[1].read_entry().class_name == "btn-red"


@pytest.mark.asyncio
async def test_save_success_shows_saved(sample_classes, gateway):
    store = ClassStore(sample_classes)
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        rows_of(app)[0].query_one(".row-class", Input).value = "Big Red"
        app.screen.action_save()
        await app.workers.wait_for_complete()
        await pilot.pause()

        gateway.save.assert_awaited_once()
        assert store.entries[0].class_name == "big-red"
        assert rows_of(app)[0].read_entry().class_name == "big-red"
        assert status_of(app).message == "Opgeslagen!"
        assert app.screen.query_one("#save-classes", Button).disabled is False


@pytest.mark.asyncio
async def test_save_failure_shows_error_and_keeps_rows(sample_classes, gateway):
    gateway.save.side_effect = TransportError("offline")
    store = ClassStore(sample_classes)
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        app.screen.action_save()
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert status_of(app).message == "Er is een fout opgetreden."
        assert status_of(app).has_class("error")
        assert store.entries == sample_classes
        assert app.screen.query_one("#save-classes", Button).disabled is False


@pytest.mark.asyncio
async def test_import_through_dialog(sample_classes, gateway):
    canonical = sample_classes + [ClassEntry(class_name="rounded")]
    gateway.batch_import.return_value = ("1 classes geïmporteerd!", canonical)
    store = ClassStore(sample_classes)
    app = ManagerTestApp(store, gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        app.screen.action_import()
        await pilot.pause()

        assert isinstance(app.screen, ImportDialog)
        app.screen.query_one("#import-text", TextArea).load_text("rounded")
        app.screen.query_one("#import-submit", Button).press()
        await pilot.pause()
        await app.workers.wait_for_complete()
        await pilot.pause()

        gateway.batch_import.assert_awaited_once_with("rounded")
        assert len(rows_of(app)) == 5
        assert status_of(app).message == "1 classes geïmporteerd!"


@pytest.mark.asyncio
async def test_blank_import_is_not_sent(sample_classes, gateway):
    app = ManagerTestApp(ClassStore(sample_classes), gateway)
    async with app.run_test(size=(120, 60)) as pilot:
        await pilot.pause()

        app.screen.action_import()
        await pilot.pause()
        app.screen.query_one("#import-submit", Button).press()
        await pilot.pause()

        gateway.batch_import.assert_not_awaited()
        assert isinstance(app.screen, ClassManagerScreen)

