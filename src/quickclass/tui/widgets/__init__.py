"""Textual widget components."""

from quickclass.tui.widgets.class_row import ClassRow
from quickclass.tui.widgets.class_selector import ClassSelector
from quickclass.tui.widgets.status_line import StatusLine

__all__ = [
    "ClassRow",
    "ClassSelector",
    "StatusLine",
]
