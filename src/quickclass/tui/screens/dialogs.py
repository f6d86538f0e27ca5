"""Modal dialogs used by the class manager."""

from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static, TextArea

from quickclass.models.config import UIStrings


class ConfirmDialog(ModalScreen[bool]):
    """Yes/no question. Dismisses with True only on explicit confirmation."""

    DEFAULT_CSS = """
    ConfirmDialog {
        align: center middle;
    }

    ConfirmDialog > Vertical {
        width: 60;
        height: auto;
        border: thick $warning;
        background: $surface;
        padding: 1 2;
    }

    ConfirmDialog Horizontal {
        height: auto;
        margin-top: 1;
    }

    ConfirmDialog Button {
        margin-right: 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, question: str, strings: Optional[UIStrings] = None):
        super().__init__()
        self.question = question
        self.strings = strings or UIStrings()

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.question, id="confirm-question")
            with Horizontal():
                yield Button(self.strings.confirm, variant="error", id="confirm-yes")
                yield Button(self.strings.cancel, id="confirm-no")

    def on_mount(self) -> None:
        self.query_one("#confirm-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-yes")

    def action_cancel(self) -> None:
        self.dismiss(False)


class ImportDialog(ModalScreen[Optional[str]]):
    """Multi-line input for batch-import text.

    Dismisses with the raw text, or None when cancelled or left blank.
    The text is not parsed here; the backend owns the import format.
    """

    DEFAULT_CSS = """
    ImportDialog {
        align: center middle;
    }

    ImportDialog > Vertical {
        width: 90%;
        height: 80%;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    ImportDialog TextArea {
        height: 1fr;
    }

    ImportDialog Horizontal {
        height: auto;
        margin-top: 1;
    }

    ImportDialog Button {
        margin-right: 2;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, strings: Optional[UIStrings] = None):
        super().__init__()
        self.strings = strings or UIStrings()

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.strings.import_help, id="import-help")
            yield TextArea(id="import-text")
            with Horizontal():
                yield Button(self.strings.import_classes, variant="primary", id="import-submit")
                yield Button(self.strings.cancel, id="import-cancel")

    def on_mount(self) -> None:
        self.query_one("#import-text", TextArea).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "import-submit":
            text = self.query_one("#import-text", TextArea).text
            self.dismiss(text if text.strip() else None)
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
