"""ClassRow widget: one editable row of the class manager."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Input, Static

from quickclass.models.class_entry import ClassEntry
from quickclass.models.config import UIStrings
from quickclass.utils.text import extract_hex_color


def render_swatch(description: str) -> Text:
    """Color cell for a description; blank when it holds no hex color."""
    color = extract_hex_color(description)
    if color is None:
        return Text("  ")
    return Text("  ", style=f"on {expand_hex(color)}")


def expand_hex(color: str) -> str:
    """Expand ``#abc`` to ``#aabbcc`` for terminals; 6-digit values pass through."""
    if len(color) == 4:
        return "#" + "".join(ch * 2 for ch in color[1:])
    return color


class ClassRow(Horizontal):
    """
    Editable row for one class entry.

    Shows:
    - Row number (global position in the list)
    - Class name input
    - Description input, with a color swatch when it holds a hex color
    - Delete button
    """

    DEFAULT_CSS = """
    ClassRow {
        height: 3;
    }

    ClassRow .row-number {
        width: 5;
        height: 3;
        content-align: right middle;
        color: $text-muted;
    }

    ClassRow .row-class {
        width: 1fr;
    }

    ClassRow .row-description {
        width: 2fr;
    }

    ClassRow .row-swatch {
        width: 4;
        height: 3;
        content-align: center middle;
    }

    ClassRow .row-delete {
        min-width: 5;
        width: 5;
    }

    ClassRow:focus-within .row-number {
        color: $accent;
        text-style: bold;
    }
    """

    class DeleteRequested(Message):
        """Posted when the row's delete button is pressed."""

        def __init__(self, row: "ClassRow") -> None:
            """Initialize message.

            Args:
                row: Row asking to be deleted
            """
            super().__init__()
            self.row = row

    def __init__(self, entry: ClassEntry, global_index: int, strings: UIStrings, **kwargs):
        """
        Initialize a class row.

        Args:
            entry: Entry to edit (not modified; read back with read_entry)
            global_index: Position of the entry in the full list
            strings: Localized placeholders
        """
        super().__init__(**kwargs)
        self.entry = entry
        self.global_index = global_index
        self.strings = strings

    def compose(self) -> ComposeResult:
        yield Static(f"{self.global_index + 1}.", classes="row-number")
        yield Input(
            value=self.entry.class_name,
            placeholder=self.strings.class_placeholder,
            classes="row-class",
        )
        yield Input(
            value=self.entry.description,
            placeholder=self.strings.description_placeholder,
            classes="row-description",
        )
        yield Static(render_swatch(self.entry.description), classes="row-swatch")
        yield Button("✕", variant="error", classes="row-delete")

    def on_input_changed(self, event: Input.Changed) -> None:
        """Keep the swatch in step with the description."""
        if event.input.has_class("row-description"):
            for swatch in self.query(".row-swatch").results(Static):
                swatch.update(render_swatch(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.DeleteRequested(self))

    def read_entry(self) -> ClassEntry:
        """Current (unsaved) values of the row."""
        return ClassEntry(
            class_name=self.query_one(".row-class", Input).value,
            description=self.query_one(".row-description", Input).value,
        )

    def focus_class_input(self) -> None:
        self.query_one(".row-class", Input).focus()
