"""Unit tests for text helpers."""

import pytest

from quickclass.utils.text import (
    EMPTY_CHANGELOG,
    extract_hex_color,
    normalize_class_name,
    render_changelog,
)


class TestExtractHexColor:
    """Test hex color extraction from descriptions."""

    def test_six_digit_color_case_preserved(self):
        assert extract_hex_color("accent #1A2b3C box") == "#1A2b3C"

    def test_three_digit_color(self):
        assert extract_hex_color("blue #00f text") == "#00f"

    def test_no_color(self):
        assert extract_hex_color("no color here") is None

    def test_empty_and_none(self):
        assert extract_hex_color("") is None
        assert extract_hex_color(None) is None

    def test_returns_first_match(self):
        assert extract_hex_color("#111 then #222222") == "#111"

    def test_four_digits_is_not_a_color(self):
        """#1234 is neither a 3- nor a 6-digit token."""
        assert extract_hex_color("code #1234") is None

    def test_non_hex_letters_rejected(self):
        assert extract_hex_color("#ggg") is None

    def test_color_at_end_of_string(self):
        assert extract_hex_color("red #ff0000") == "#ff0000"


class TestNormalizeClassName:
    """Test class name normalization."""

    def test_trims_hyphenates_and_lowercases(self):
        assert normalize_class_name(" Foo Bar ") == "foo-bar"

    def test_keeps_allowed_characters(self):
        assert normalize_class_name("my_Class-2") == "my_class-2"

    def test_replaces_each_invalid_character(self):
        assert normalize_class_name("a.b/c") == "a-b-c"

    def test_empty_input(self):
        assert normalize_class_name("") == ""
        assert normalize_class_name("   ") == ""
        assert normalize_class_name(None) == ""

    def test_non_ascii_is_replaced(self):
        assert normalize_class_name("café") == "caf-"

    @pytest.mark.parametrize("raw", [
        " Foo Bar ",
        "already-fine",
        "ÄÖÜ stuff!!",
        "\ttabbed\n",
        "",
        "--",
        "x y z",
    ])
    def test_idempotent(self, raw):
        once = normalize_class_name(raw)
        assert normalize_class_name(once) == once


class TestRenderChangelog:
    """Test minimal release-notes rendering."""

    def test_empty_body(self):
        assert render_changelog("") == EMPTY_CHANGELOG
        assert render_changelog("   \n") == EMPTY_CHANGELOG
        assert render_changelog(None) == EMPTY_CHANGELOG

    def test_bold_and_italic(self):
        html = render_changelog("**New** and *shiny*")
        assert html == "<strong>New</strong> and <em>shiny</em>"

    def test_escapes_html(self):
        html = render_changelog("<script>alert('x')</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_newlines_become_breaks(self):
        assert render_changelog("one\ntwo") == "one<br />\ntwo"

    def test_contiguous_items_form_one_list(self):
        html = render_changelog("Changes:\n- first\n- **second**\nThanks")
        assert html == (
            "Changes:\n"
            "<ul><li>first</li><li><strong>second</strong></li></ul>\n"
            "Thanks"
        )
        assert html.count("<ul>") == 1

    def test_separated_items_form_two_lists(self):
        html = render_changelog("- a\ntext\n- b")
        assert html.count("<ul>") == 2

    def test_unmatched_markup_passes_through(self):
        assert render_changelog("a * b") == "a * b"
        assert render_changelog("**open") == "**open"
