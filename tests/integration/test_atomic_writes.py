"""Integration tests for atomic writes of the class store file."""

from unittest.mock import patch

import pytest

from quickclass.services.file_operations import atomic_write


def test_creates_parent_directories(tmp_path):
    target = tmp_path / "nested" / "classes.json"

    atomic_write(target, "[]\n")

    assert target.read_text() == "[]\n"


def test_replaces_existing_content(tmp_path):
    target = tmp_path / "classes.json"
    target.write_text("old")

    atomic_write(target, "new")

    assert target.read_text() == "new"
    assert [p.name for p in tmp_path.iterdir()] == ["classes.json"]


def test_failure_keeps_original_and_removes_temp(tmp_path):
    target = tmp_path / "classes.json"
    target.write_text("original")

    with patch("quickclass.services.file_operations.os.fsync", side_effect=OSError("disk full")):
        with pytest.raises(OSError):
            atomic_write(target, "new")

    assert target.read_text() == "original"
    assert [p.name for p in tmp_path.iterdir()] == ["classes.json"]
