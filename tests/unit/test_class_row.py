"""Unit tests for swatch rendering helpers."""

from quickclass.tui.widgets.class_row import expand_hex, render_swatch


def test_expand_short_hex():
    assert expand_hex("#0f8") == "#00ff88"


def test_long_hex_passes_through():
    assert expand_hex("#12abEF") == "#12abEF"


def test_swatch_uses_description_color():
    swatch = render_swatch("Rode knop #ff0000")

    assert str(swatch.style) == "on #ff0000"


def test_swatch_blank_without_color():
    swatch = render_swatch("Volle breedte")

    assert str(swatch.style) == ""
    assert swatch.plain == "  "
