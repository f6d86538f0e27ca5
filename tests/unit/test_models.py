"""Unit tests for data models."""

import pytest

from quickclass.models.class_entry import ClassEntry, coerce_entry, parse_class_list
from quickclass.models.results import SyncResult
from quickclass.models.selector_view import OptionRow, SelectorView


class TestClassEntry:
    """Test ClassEntry model."""

    def test_defaults_are_empty(self):
        entry = ClassEntry()

        assert entry.class_name == ""
        assert entry.description == ""

    def test_wire_alias(self):
        entry = ClassEntry.model_validate({"class": "wide", "description": "Full width"})

        assert entry.class_name == "wide"
        assert entry.to_payload() == {"class": "wide", "description": "Full width"}

    def test_populate_by_field_name(self):
        entry = ClassEntry(class_name="wide")
        assert entry.class_name == "wide"

    def test_unknown_fields_ignored(self):
        entry = ClassEntry.model_validate({"class": "wide", "color": "red"})
        assert entry.to_payload() == {"class": "wide", "description": ""}

    def test_entry_is_mutable(self):
        entry = ClassEntry(class_name="a")
        entry.class_name = "b"
        assert entry.class_name == "b"

    def test_value_equality(self):
        assert ClassEntry(class_name="a", description="x") == ClassEntry(class_name="a", description="x")


class TestHelpers:
    """Test list parsing helpers."""

    def test_coerce_copies_entries(self):
        original = ClassEntry(class_name="a")
        copy = coerce_entry(original)

        copy.class_name = "b"
        assert original.class_name == "a"

    def test_coerce_mapping(self):
        assert coerce_entry({"class": "a"}) == ClassEntry(class_name="a")

    def test_parse_class_list_skips_non_mappings(self):
        classes = parse_class_list([{"class": "a"}, "junk", 3, {"class": "b", "description": "B"}])

        assert [c.class_name for c in classes] == ["a", "b"]


class TestSyncResult:
    """Test SyncResult model."""

    def test_failed_result_has_no_classes(self):
        result = SyncResult(action="save", success=False, message="down")

        assert result.classes == []
        assert result.success is False

    def test_result_is_frozen(self):
        result = SyncResult(action="import", success=True)

        with pytest.raises(Exception):  # Pydantic ValidationError
            result.success = False

    def test_rejects_unknown_action(self):
        with pytest.raises(Exception):  # Pydantic ValidationError
            SyncResult(action="delete", success=True)


class TestSelectorView:
    """Test selector presentation models."""

    def test_view_defaults(self):
        view = SelectorView(label="Quick Classes", trigger_text="Selecteer classes...")

        assert view.is_open is False
        assert view.options == []
        assert view.tags == []

    def test_option_row_swatch_optional(self):
        row = OptionRow(class_name="wide")
        assert row.swatch is None
        assert row.selected is False
