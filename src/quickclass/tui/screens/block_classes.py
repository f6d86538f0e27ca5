"""Block Classes Screen: edit one block's class string with the selector.

This screen stands in for the editor surface that hosts the selector. It
owns the block's class attribute (``class_string``) and hands the selector
an ``on_change`` callback that writes to it.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.errors import NoWidget
from textual.events import MouseDown
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
import structlog

from quickclass.models.config import EditorSettings
from quickclass.services.selector import should_attach
from quickclass.tui.widgets import ClassSelector

logger = structlog.get_logger()


class BlockClassesScreen(Screen):
    """Hosts the ClassSelector for a single block."""

    CSS = """
    #block-panel {
        padding: 1 2;
    }

    #class-string {
        border: round $secondary;
        padding: 0 1;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+s", "done", "Done", priority=True),
    ]

    def __init__(
        self,
        settings: EditorSettings,
        class_string: str = "",
        *args,
        **kwargs
    ):
        """Initialize BlockClassesScreen.

        Args:
            settings: Predefined classes and localized strings
            class_string: The block's class attribute at session start
        """
        super().__init__(*args, **kwargs)
        self.settings = settings
        self.class_string = class_string

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="block-panel"):
            yield Static(self._class_string_label(), id="class-string")
            if should_attach(self.settings.classes):
                yield ClassSelector(
                    self.settings.classes,
                    self.class_string,
                    strings=self.settings.strings,
                    on_change=self.set_block_classes,
                    id="class-selector",
                )
            else:
                yield Static(self.settings.strings.no_classes, id="no-classes")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.settings.strings.title

    def _class_string_label(self) -> str:
        return f"class: {self.class_string}" if self.class_string else "class: (none)"

    def set_block_classes(self, class_string: str) -> None:
        """Attribute-store callback: the selector's only write path."""
        self.class_string = class_string
        self.query_one("#class-string", Static).update(self._class_string_label())
        logger.info("block_classes_changed", class_string=class_string)

    async def on_mouse_down(self, event: MouseDown) -> None:
        """Close the selector menu on pointer interaction outside it."""
        selector = next(iter(self.query(ClassSelector)), None)
        if selector is None or not selector.is_open:
            return

        try:
            widget, _ = self.get_widget_at(event.screen_x, event.screen_y)
        except NoWidget:
            widget = None

        if widget is None or selector not in widget.ancestors_with_self:
            await selector.close_menu()

    def action_done(self) -> None:
        logger.info("user_action_block_classes_done", class_string=self.class_string)
        self.app.exit(self.class_string)
