"""ClassSelector widget: searchable multi-select over the predefined classes.

Renders the SelectorView produced by ``quickclass.services.selector`` and
forwards user interaction to a SelectorWidget. The block's class string is
not stored here; every change is posted as ``ClassSelector.Changed`` and
passed to the optional ``on_change`` callback.
"""

from typing import Callable, Optional, Sequence

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Input, Label, OptionList
from textual.widgets.option_list import Option
import structlog

from quickclass.models.class_entry import ClassEntry
from quickclass.models.config import UIStrings
from quickclass.models.selector_view import OptionRow
from quickclass.services.selector import SelectorWidget
from quickclass.tui.widgets.class_row import expand_hex

logger = structlog.get_logger()


def render_option(row: OptionRow) -> Text:
    """Rich prompt for one option: check box, swatch, .class and description."""
    text = Text()
    if row.selected:
        text.append("✓ ", style="bold green")
    else:
        text.append("  ")

    if row.swatch:
        text.append("  ", style=f"on {expand_hex(row.swatch)}")
        text.append(" ")

    text.append(f".{row.class_name}", style="bold" if row.selected else "")
    if row.description:
        text.append(f"  {row.description}", style="dim")
    return text


class TagButton(Button):
    """Remove button for one selected class."""

    def __init__(self, token: str, **kwargs):
        super().__init__(f".{token} ×", classes="qcs-tag", **kwargs)
        self.token = token


class ClassSelector(Vertical):
    """
    Multi-select for attaching predefined classes to a block.

    Layout:
    - Label
    - Trigger button (summary of the selection)
    - Menu (while open): search input, clear-all button, option list
    - Selected tags, each with a remove button

    Interaction:
    - Enter/click on the trigger opens and closes the menu
    - Typing in the search input filters by class or description
    - Enter/click on an option toggles it
    - Escape closes the menu
    """

    DEFAULT_CSS = """
    ClassSelector {
        height: auto;
        border: round $primary;
        padding: 0 1;
    }

    ClassSelector #qcs-trigger {
        width: 1fr;
    }

    ClassSelector #qcs-menu {
        height: auto;
    }

    ClassSelector #qcs-options {
        height: auto;
        max-height: 14;
    }

    ClassSelector #qcs-tags {
        height: auto;
    }

    ClassSelector .qcs-tag {
        min-width: 8;
        margin-right: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
    ]

    class Changed(Message):
        """Posted when the block's class string changes."""

        def __init__(self, selector: "ClassSelector", class_string: str) -> None:
            """Initialize message.

            Args:
                selector: Selector that produced the change
                class_string: New class string for the block
            """
            super().__init__()
            self.selector = selector
            self.class_string = class_string

    def __init__(
        self,
        predefined: Sequence[ClassEntry],
        class_string: str = "",
        strings: Optional[UIStrings] = None,
        on_change: Optional[Callable[[str], None]] = None,
        **kwargs,
    ):
        """
        Initialize ClassSelector.

        Args:
            predefined: Predefined classes (read-only)
            class_string: Block's current class string
            strings: Localized strings
            on_change: Host callback receiving each new class string
        """
        super().__init__(**kwargs)
        self.strings = strings or UIStrings()
        self._host_on_change = on_change
        self.selector = SelectorWidget(
            predefined,
            class_string,
            on_change=self._emit_change,
            strings=self.strings,
        )
        # Options currently listed, by option index
        self._listed: list[OptionRow] = []

    def compose(self) -> ComposeResult:
        view = self.selector.describe()
        yield Label(view.label, id="qcs-label")
        yield Button(view.trigger_text, id="qcs-trigger")
        with Vertical(id="qcs-menu"):
            yield Input(placeholder=self.strings.search_placeholder, id="qcs-search")
            yield Button(self.strings.clear_all, variant="warning", id="qcs-clear")
            yield OptionList(id="qcs-options")
        yield Horizontal(id="qcs-tags")

    async def on_mount(self) -> None:
        await self.refresh_view()

    @property
    def class_string(self) -> str:
        return self.selector.class_string

    @property
    def is_open(self) -> bool:
        return self.selector.is_open

    def _emit_change(self, class_string: str) -> None:
        self.post_message(self.Changed(self, class_string))
        if self._host_on_change is not None:
            self._host_on_change(class_string)

    async def refresh_view(self) -> None:
        """Re-render every part of the widget from the current SelectorView."""
        view = self.selector.describe()

        self.query_one("#qcs-trigger", Button).label = view.trigger_text
        self.query_one("#qcs-menu").display = view.is_open
        self.query_one("#qcs-clear", Button).display = view.show_clear

        search = self.query_one("#qcs-search", Input)
        if search.value != view.search_term:
            search.value = view.search_term

        option_list = self.query_one("#qcs-options", OptionList)
        highlighted = option_list.highlighted
        option_list.clear_options()
        self._listed = list(view.options)
        option_list.add_options([Option(render_option(row)) for row in self._listed])
        if self._listed and highlighted is not None:
            option_list.highlighted = min(highlighted, len(self._listed) - 1)

        tags = self.query_one("#qcs-tags", Horizontal)
        await tags.remove_children()
        if view.tags:
            await tags.mount_all([TagButton(token) for token in view.tags])

    async def open_menu(self) -> None:
        self.selector.open()
        await self.refresh_view()
        self.query_one("#qcs-search", Input).focus()

    async def close_menu(self) -> None:
        if self.selector.is_open:
            self.selector.close()
            await self.refresh_view()

    async def set_class_string(self, class_string: str) -> None:
        """Adopt a class string changed elsewhere by the host."""
        self.selector.set_class_string(class_string)
        await self.refresh_view()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button = event.button

        if isinstance(button, TagButton):
            self.selector.remove_tag(button.token)
        elif button.id == "qcs-trigger":
            if self.selector.is_open:
                self.selector.close()
            else:
                await self.open_menu()
                return
        elif button.id == "qcs-clear":
            self.selector.clear_all()

        await self.refresh_view()

    async def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "qcs-search":
            return
        event.stop()
        if event.value != self.selector.state.search_term:
            self.selector.set_search(event.value)
            await self.refresh_view()

    async def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        if 0 <= event.option_index < len(self._listed):
            self.selector.toggle(self._listed[event.option_index].class_name)
            await self.refresh_view()

    async def action_dismiss(self) -> None:
        logger.info("user_action_dismiss_selector")
        await self.close_menu()
