"""Text helpers for class names, swatch colors and release notes.

These are pure functions with no knowledge of the store, the selector or
the terminal UI.
"""

import html
import re
from typing import Optional


HEX_COLOR_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})\b")

_INVALID_CLASS_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_LIST_ITEM = re.compile(r"^-\s+(.+)$")

EMPTY_CHANGELOG = "<p>No changelog provided.</p>"


def extract_hex_color(text: Optional[str]) -> Optional[str]:
    """
    Find the first hex color token in free text.

    Matches ``#`` followed by exactly 6 or 3 hex digits, ending on a word
    boundary. The match is returned verbatim (case preserved, 3-digit form
    not expanded).

    Args:
        text: Text to search, typically a class description

    Returns:
        The hex token (e.g. ``"#1A2b3C"``) or None if there is none

    Example:
        >>> extract_hex_color("accent #1A2b3C box")
        '#1A2b3C'
    """
    if not text:
        return None

    match = HEX_COLOR_PATTERN.search(text)
    return match.group(0) if match else None


def normalize_class_name(raw: Optional[str]) -> str:
    """
    Normalize user input into a CSS class token.

    Trims surrounding whitespace, replaces every character outside
    ``[A-Za-z0-9_-]`` with ``-`` and lowercases the result. The function is
    total and idempotent; empty or blank input yields ``""``.

    Args:
        raw: Class name as typed by the user

    Returns:
        Normalized class name
    """
    if not raw:
        return ""

    return _INVALID_CLASS_CHARS.sub("-", raw.strip()).lower()


def _format_inline(escaped: str) -> str:
    escaped = _BOLD.sub(r"<strong>\1</strong>", escaped)
    return _ITALIC.sub(r"<em>\1</em>", escaped)


def render_changelog(body: Optional[str]) -> str:
    """
    Convert a release-notes body into minimal HTML.

    Supported syntax:
    - ``**bold**`` and ``*italic*`` spans
    - contiguous ``- item`` lines, grouped into a single ``<ul>``
    - newlines between text lines become ``<br />``

    Everything is HTML-escaped first, so unsupported markup passes through
    as literal text.

    Args:
        body: Markdown-ish release body

    Returns:
        HTML fragment
    """
    if not body or not body.strip():
        return EMPTY_CHANGELOG

    segments: list[tuple[str, str]] = []
    items: list[str] = []

    for line in body.splitlines():
        match = _LIST_ITEM.match(line)
        if match:
            items.append(f"<li>{_format_inline(html.escape(match.group(1)))}</li>")
            continue

        if items:
            segments.append(("list", "<ul>" + "".join(items) + "</ul>"))
            items = []
        segments.append(("text", _format_inline(html.escape(line))))

    if items:
        segments.append(("list", "<ul>" + "".join(items) + "</ul>"))

    parts: list[str] = []
    previous_kind: Optional[str] = None
    for kind, fragment in segments:
        if previous_kind is not None:
            # Line breaks only separate consecutive text lines
            parts.append("<br />\n" if kind == previous_kind == "text" else "\n")
        parts.append(fragment)
        previous_kind = kind

    return "".join(parts)
