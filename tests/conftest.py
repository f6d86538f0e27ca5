"""Shared test fixtures for all test modules."""

import pytest

from quickclass.models.class_entry import ClassEntry


@pytest.fixture
def sample_classes():
    """Predefined classes covering colors, plain text and an empty description."""
    return [
        ClassEntry(class_name="btn-red", description="Rode knop #ff0000"),
        ClassEntry(class_name="btn-blue", description="Blauwe knop #00f"),
        ClassEntry(class_name="wide", description="Volle breedte"),
        ClassEntry(class_name="shadow", description=""),
    ]


@pytest.fixture
def numbered_classes():
    """Factory for n entries named cls-0 .. cls-(n-1)."""
    def make(count: int) -> list[ClassEntry]:
        return [
            ClassEntry(class_name=f"cls-{i}", description=f"Entry {i}")
            for i in range(count)
        ]
    return make


@pytest.fixture(autouse=True)
def clean_quickclass_env(monkeypatch):
    """Keep QUICKCLASS_* variables from the developer's shell out of tests."""
    for name in (
        "QUICKCLASS_BACKEND_KIND",
        "QUICKCLASS_BACKEND_PATH",
        "QUICKCLASS_BACKEND_AJAX_URL",
        "QUICKCLASS_BACKEND_NONCE",
        "QUICKCLASS_UI_STATUS_TIMEOUT",
        "QUICKCLASS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
