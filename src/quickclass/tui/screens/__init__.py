"""Textual screen components."""

from quickclass.tui.screens.block_classes import BlockClassesScreen
from quickclass.tui.screens.class_manager import ClassManagerScreen
from quickclass.tui.screens.dialogs import ConfirmDialog, ImportDialog

__all__ = [
    "BlockClassesScreen",
    "ClassManagerScreen",
    "ConfirmDialog",
    "ImportDialog",
]
