"""Main Quick Class Selector TUI Application.

One app, two modes:

- ``manage``: the admin class manager (ClassManagerScreen), backed by a
  ClassStore and a BackendGateway.
- ``select``: the editor-side selector for a single block
  (BlockClassesScreen). The app's return value is the block's final class
  string.

The class list is loaded by the caller before the app starts, the same way
the plugin renders it into the page instead of fetching it.
"""

from typing import Literal, Optional

from textual.app import App
from textual.binding import Binding
import structlog

from quickclass.models.class_entry import ClassList
from quickclass.models.config import Config, EditorSettings
from quickclass.services.backend import BackendGateway
from quickclass.services.class_store import ClassStore
from quickclass.tui.screens import BlockClassesScreen, ClassManagerScreen

logger = structlog.get_logger()


class QuickClassApp(App[str]):
    """Textual front end for the class manager and the class selector."""

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        classes: ClassList,
        config: Config,
        gateway: Optional[BackendGateway] = None,
        mode: Literal["manage", "select"] = "manage",
        class_string: str = "",
    ):
        """Initialize the app.

        Args:
            classes: Class list snapshot loaded from the backend
            config: Application configuration
            gateway: Backend for save/import (required in manage mode)
            mode: Which screen to start with
            class_string: Initial block class string (select mode)
        """
        super().__init__()
        if mode == "manage" and gateway is None:
            raise ValueError("manage mode needs a backend gateway")

        self.config = config
        self.gateway = gateway
        self.mode = mode
        self.class_string = class_string
        self.store = ClassStore(classes, page_size=config.ui.page_size)
        self.settings = EditorSettings(classes=classes, strings=config.strings)

        logger.info("app_initialized", mode=mode, num_classes=len(classes))

    def on_mount(self) -> None:
        """Push the screen for the selected mode."""
        self.title = self.config.strings.title

        if self.mode == "manage":
            self.push_screen(
                ClassManagerScreen(
                    self.store,
                    self.gateway,
                    strings=self.config.strings,
                    status_timeout=self.config.ui.status_timeout,
                    name="manager",
                )
            )
        else:
            self.push_screen(
                BlockClassesScreen(self.settings, self.class_string, name="block")
            )
