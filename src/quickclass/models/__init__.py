"""Pydantic data models for Quick Class Selector."""

from quickclass.models.class_entry import ClassEntry, ClassList, coerce_entry, parse_class_list
from quickclass.models.results import SyncResult
from quickclass.models.selector_view import OptionRow, SelectorView

__all__ = [
    "ClassEntry",
    "ClassList",
    "coerce_entry",
    "parse_class_list",
    "SyncResult",
    "OptionRow",
    "SelectorView",
]
