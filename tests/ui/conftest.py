"""Shared fixtures for UI tests."""

from unittest.mock import AsyncMock

import pytest

from quickclass.models.config import EditorSettings


@pytest.fixture
def gateway():
    """Gateway double whose save echoes the candidate list as canonical."""
    gateway = AsyncMock()
    gateway.save.side_effect = lambda candidate: list(candidate)
    return gateway


@pytest.fixture
def editor_settings(sample_classes):
    """Editor settings with the sample classes and default Dutch strings."""
    return EditorSettings(classes=sample_classes)
