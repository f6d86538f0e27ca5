"""Server-side sanitization of class lists and batch-import text.

The backend is the final authority on what a valid entry looks like. These
rules mirror the WordPress sanitizers the plugin backend applies, so the
local file backend returns the same canonical lists the real endpoint would.
"""

import re
from typing import Any, Iterable

import structlog

from quickclass.models.class_entry import ClassEntry, ClassList

logger = structlog.get_logger()

_PERCENT_OCTET = re.compile(r"%[a-fA-F0-9]{2}")
_NOT_HTML_CLASS = re.compile(r"[^A-Za-z0-9_-]")
_TAG = re.compile(r"<[^>]*>")
_WHITESPACE_RUN = re.compile(r"[\r\n\t ]+")
_IMPORT_SEPARATOR = re.compile(r"\t|\||;|,")


def sanitize_html_class(value: Any) -> str:
    """Strip percent-encoded octets and every character not allowed in a class.

    Unlike normalize_class_name this removes characters instead of
    replacing them, and preserves case.
    """
    if not isinstance(value, str):
        return ""
    return _NOT_HTML_CLASS.sub("", _PERCENT_OCTET.sub("", value))


def sanitize_text_field(value: Any) -> str:
    """Strip tags and octets, collapse whitespace runs and trim."""
    if not isinstance(value, str):
        return ""
    cleaned = _TAG.sub("", value)
    cleaned = _PERCENT_OCTET.sub("", cleaned)
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()


def sanitize_classes(items: Iterable[Any]) -> ClassList:
    """
    Re-validate a candidate list the way the backend does.

    Entries that are not mappings, or whose sanitized class is empty, are
    dropped. Unknown fields are dropped. Order is preserved.

    Args:
        items: Mappings with "class" and optional "description" keys

    Returns:
        Canonical class list
    """
    sanitized: ClassList = []
    dropped = 0

    for item in items:
        if isinstance(item, ClassEntry):
            item = item.to_payload()
        if not isinstance(item, dict):
            dropped += 1
            continue

        class_name = sanitize_html_class(item.get("class"))
        if not class_name:
            dropped += 1
            continue

        sanitized.append(
            ClassEntry(
                class_name=class_name,
                description=sanitize_text_field(item.get("description", "")),
            )
        )

    if dropped:
        logger.warning("sanitize_classes_dropped_entries", dropped=dropped, kept=len(sanitized))

    return sanitized


def parse_import_text(raw_text: str) -> ClassList:
    """
    Parse batch-import text into sanitized entries.

    Format: one entry per line. The class name and the description are
    separated by the first TAB, ``|``, ``;`` or ``,``; the description is
    optional. Blank lines and lines starting with ``#`` are ignored.

    Args:
        raw_text: Text pasted or read from a file

    Returns:
        Sanitized entries in input order (may be empty)

    Example:
        >>> [e.class_name for e in parse_import_text("btn-red\\tRed #f00\\n# note\\nwide")]
        ['btn-red', 'wide']
    """
    candidates: list[dict[str, str]] = []

    for line in raw_text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        parts = _IMPORT_SEPARATOR.split(stripped, maxsplit=1)
        candidates.append({
            "class": parts[0].strip(),
            "description": parts[1] if len(parts) > 1 else "",
        })

    return sanitize_classes(candidates)
