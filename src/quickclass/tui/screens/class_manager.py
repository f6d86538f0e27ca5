"""Class Manager Screen: curate the predefined class list.

This screen shows one page of the class list as editable rows. The
ClassStore holds the full list; the rows only hold the current page's
unsaved edits, which are flushed into the store before anything that
re-renders the page (navigation, add, delete, reorder, save, import).
"""

from typing import Literal, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Static
import structlog

from quickclass.models.class_entry import ClassEntry
from quickclass.models.config import UIStrings
from quickclass.models.results import SyncResult
from quickclass.services.backend import BackendGateway
from quickclass.services.class_store import ClassStore
from quickclass.tui.screens.dialogs import ConfirmDialog, ImportDialog
from quickclass.tui.widgets import ClassRow, StatusLine

logger = structlog.get_logger()


class ClassManagerScreen(Screen):
    """Paginated editor for the predefined class list."""

    CSS = """
    #manager-intro {
        padding: 0 1 1 1;
        color: $text-muted;
    }

    #rows {
        height: 1fr;
    }

    #pager, #actions {
        height: auto;
        padding: 0 1;
    }

    #page-indicator {
        width: auto;
        padding: 1 2;
    }

    #actions Button {
        margin-right: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "add_entry", "Add"),
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+b", "import", "Import"),
        Binding("ctrl+r", "delete_focused", "Remove"),
        Binding("pageup", "prev_page", "Prev Page"),
        Binding("pagedown", "next_page", "Next Page"),
        Binding("ctrl+up", "move_up", "Move Up"),
        Binding("ctrl+down", "move_down", "Move Down"),
    ]

    def __init__(
        self,
        store: ClassStore,
        gateway: BackendGateway,
        strings: Optional[UIStrings] = None,
        status_timeout: float = 2.0,
        *args,
        **kwargs
    ):
        """Initialize ClassManagerScreen.

        Args:
            store: Store preloaded with the backend's list
            gateway: Backend used for save and import
            strings: Localized strings
            status_timeout: Seconds before status text is dismissed
        """
        super().__init__(*args, **kwargs)
        self.store = store
        self.gateway = gateway
        self.strings = strings or UIStrings()
        self.status_timeout = status_timeout

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="manager"):
            yield Static(self.strings.manager_intro, id="manager-intro")
            yield VerticalScroll(id="rows")
            with Horizontal(id="pager"):
                yield Button("‹", id="prev-page")
                yield Static("", id="page-indicator")
                yield Button("›", id="next-page")
            with Horizontal(id="actions"):
                yield Button(self.strings.add_class, id="add-class")
                yield Button(self.strings.import_classes, id="import-classes")
                yield Button(self.strings.save, variant="primary", id="save-classes")
                yield StatusLine(timeout=self.status_timeout, id="status")
        yield Footer()

    async def on_mount(self) -> None:
        self.title = self.strings.title
        logger.info("class_manager_mounted", count=len(self.store.entries))
        await self.render_page()

    def on_unmount(self) -> None:
        # Pending round-trips must not apply to a store nobody shows anymore
        self.store.close()

    # Rendering

    def page_edits(self) -> list[ClassEntry]:
        """Unsaved values of the rows on screen, in display order."""
        return [row.read_entry() for row in self.query(ClassRow)]

    async def render_page(self, focus_row: Optional[int] = None) -> None:
        """
        Rebuild the rows for the store's current page.

        Args:
            focus_row: Page-local row whose class input gets focus (-1 = last)
        """
        container = self.query_one("#rows", VerticalScroll)
        await container.remove_children()

        window = self.store.get_page()
        offset = self.store.page_offset()
        rows = [
            ClassRow(entry, offset + i, self.strings)
            for i, entry in enumerate(window)
        ]
        if rows:
            await container.mount_all(rows)

        page, total = self.store.current_page, self.store.total_pages
        self.query_one("#page-indicator", Static).update(
            self.strings.page_indicator.format(page=page, total=total)
        )
        self.query_one("#prev-page", Button).disabled = page <= 1
        self.query_one("#next-page", Button).disabled = page >= total

        if rows and focus_row is not None:
            row = rows[focus_row] if -len(rows) <= focus_row < len(rows) else rows[-1]
            row.focus_class_input()

    def _focused_row(self) -> Optional[ClassRow]:
        focused = self.focused
        if focused is None:
            return None
        for node in focused.ancestors_with_self:
            if isinstance(node, ClassRow):
                return node
        return None

    def _page_local_index(self, row: ClassRow) -> int:
        return row.global_index - self.store.page_offset()

    # Button handlers

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        if button_id == "prev-page":
            await self.action_prev_page()
        elif button_id == "next-page":
            await self.action_next_page()
        elif button_id == "add-class":
            await self.action_add_entry()
        elif button_id == "import-classes":
            self.action_import()
        elif button_id == "save-classes":
            self.action_save()

    def on_class_row_delete_requested(self, message: ClassRow.DeleteRequested) -> None:
        self._confirm_delete(message.row)

    # Keyboard actions

    async def action_prev_page(self) -> None:
        self.store.prev_page(self.page_edits())
        logger.info("user_action_prev_page", page=self.store.current_page)
        await self.render_page()

    async def action_next_page(self) -> None:
        self.store.next_page(self.page_edits())
        logger.info("user_action_next_page", page=self.store.current_page)
        await self.render_page()

    async def action_add_entry(self) -> None:
        index = self.store.add_entry(self.page_edits())
        logger.info("user_action_add_class", index=index)
        await self.render_page(focus_row=-1)

    def action_delete_focused(self) -> None:
        row = self._focused_row()
        if row is not None:
            self._confirm_delete(row)

    async def action_move_up(self) -> None:
        await self._move_focused(-1)

    async def action_move_down(self) -> None:
        await self._move_focused(1)

    async def _move_focused(self, step: int) -> None:
        row = self._focused_row()
        if row is None:
            return

        local_index = self._page_local_index(row)
        target = local_index + step
        if self.store.move_within_page(local_index, target, self.page_edits()):
            logger.info("user_action_move_class", from_index=local_index, to_index=target)
            await self.render_page(focus_row=target)

    def _confirm_delete(self, row: ClassRow) -> None:
        global_index = row.global_index

        def confirmed(result: Optional[bool]) -> None:
            if not result:
                return
            if self.store.delete_entry(global_index, self.page_edits()):
                logger.info("user_action_delete_class", index=global_index)
            self.call_later(self.render_page)

        self.app.push_screen(ConfirmDialog(self.strings.confirm_delete, self.strings), confirmed)

    # Backend round-trips

    def action_save(self) -> None:
        if self.store.is_busy("save"):
            return
        edits = self.page_edits()
        self.query_one("#save-classes", Button).disabled = True
        self.run_worker(self._save_worker(edits), name="save_classes")

    def action_import(self) -> None:
        if self.store.is_busy("import"):
            return

        def submitted(raw_text: Optional[str]) -> None:
            if raw_text is None:
                return
            edits = self.page_edits()
            self.query_one("#import-classes", Button).disabled = True
            self.run_worker(self._import_worker(raw_text, edits), name="import_classes")

        self.app.push_screen(ImportDialog(self.strings), submitted)

    async def _save_worker(self, edits: list[ClassEntry]) -> None:
        result = await self.store.save(self.gateway, edits)
        await self._apply_result(result, "#save-classes")

    async def _import_worker(self, raw_text: str, edits: list[ClassEntry]) -> None:
        result = await self.store.batch_import(self.gateway, raw_text, edits)
        await self._apply_result(result, "#import-classes")

    async def _apply_result(self, result: SyncResult, button_id: str) -> None:
        if not self.is_mounted:
            return

        self.query_one(button_id, Button).disabled = False
        self._show_status(result)
        if result.success:
            await self.render_page()

    def _show_status(self, result: SyncResult) -> None:
        status = self.query_one("#status", StatusLine)
        kind: Literal["success", "error"] = "success" if result.success else "error"

        if not result.success:
            status.show(self.strings.error, kind)
        elif result.action == "import" and result.message:
            status.show(result.message, kind)
        else:
            status.show(self.strings.saved, kind)
