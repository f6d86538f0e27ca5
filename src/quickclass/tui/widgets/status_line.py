"""StatusLine widget for transient save/import feedback.

Shows a short success or error message and clears it again after a
timeout. Nothing is kept: there is no persistent error log in the UI.
"""

from typing import Literal, Optional

from textual.timer import Timer
from textual.widgets import Static


class StatusLine(Static):
    """Inline status text that dismisses itself."""

    DEFAULT_CSS = """
    StatusLine {
        width: 1fr;
        height: 1;
        padding: 0 1;
        content-align: left middle;
    }

    StatusLine.success {
        color: $success;
    }

    StatusLine.error {
        color: $error;
    }
    """

    def __init__(self, timeout: float = 2.0, *args, **kwargs):
        """Initialize StatusLine.

        Args:
            timeout: Seconds before a shown message is cleared (0 keeps it)
        """
        super().__init__("", *args, **kwargs)
        self.timeout = timeout
        self.message = ""
        self._timer: Optional[Timer] = None

    def show(self, message: str, kind: Literal["success", "error"]) -> None:
        """Display a message and schedule its dismissal."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

        self.message = message
        self.remove_class("success", "error")
        self.add_class(kind)
        self.update(message)

        if self.timeout > 0:
            self._timer = self.set_timer(self.timeout, self.clear)

    def clear(self) -> None:
        """Remove the current message."""
        self._timer = None
        self.message = ""
        self.remove_class("success", "error")
        self.update("")
