"""Class selector: attach predefined classes to a block's class string.

The block's class string is owned by the host (the block attribute store);
the selector reads it, computes which predefined classes are on it, and
hands every change back through an ``on_change`` callback.

Everything here is host-independent. ``describe`` is a pure function that
turns the inputs into a ``SelectorView``; the Textual widget in
``quickclass.tui.widgets.class_selector`` renders that view.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import structlog

from quickclass.models.class_entry import ClassEntry
from quickclass.models.config import UIStrings
from quickclass.models.selector_view import OptionRow, SelectorView
from quickclass.utils.text import extract_hex_color

logger = structlog.get_logger()


def tokens(class_string: Optional[str]) -> list[str]:
    """Split a class string on whitespace, dropping empty tokens."""
    if not class_string:
        return []
    return class_string.split()


def selected_tokens(predefined: Sequence[ClassEntry], class_string: Optional[str]) -> list[str]:
    """
    Predefined class names present in the class string.

    Ordered by the predefined list. Entries sharing a class name collapse
    into one token.
    """
    current = set(tokens(class_string))
    selected: list[str] = []
    for entry in predefined:
        if entry.class_name in current and entry.class_name not in selected:
            selected.append(entry.class_name)
    return selected


def visible_options(predefined: Sequence[ClassEntry], search_term: str) -> list[ClassEntry]:
    """Entries whose class or description contains ``search_term`` (case-insensitive)."""
    needle = search_term.casefold()
    if not needle:
        return list(predefined)
    return [
        entry for entry in predefined
        if needle in entry.class_name.casefold() or needle in entry.description.casefold()
    ]


def toggle_token(class_string: Optional[str], token: str) -> str:
    """
    Add ``token`` if absent, otherwise remove every occurrence.

    Other tokens keep their order. An added token goes to the end.
    """
    current = tokens(class_string)
    if not token.strip():
        return " ".join(current)
    if token in current:
        return " ".join(t for t in current if t != token)
    current.append(token)
    return " ".join(current)


def clear_predefined(predefined: Sequence[ClassEntry], class_string: Optional[str]) -> str:
    """Remove every predefined class from the class string, keeping the rest in order."""
    predefined_names = {entry.class_name for entry in predefined}
    return " ".join(t for t in tokens(class_string) if t not in predefined_names)


def trigger_text(selected_count: int, strings: UIStrings) -> str:
    """Summary shown on the closed trigger."""
    if selected_count == 0:
        return strings.selector_placeholder
    template = strings.selected_one if selected_count == 1 else strings.selected_many
    return template.format(count=selected_count)


def should_attach(predefined: Sequence[ClassEntry]) -> bool:
    """The selector is only offered when there is something to select."""
    return len(predefined) > 0


@dataclass
class SelectorState:
    """Per-instance UI state. Discarded when the widget unmounts."""

    class_string: str = ""
    is_open: bool = False
    search_term: str = ""


def describe(
    predefined: Sequence[ClassEntry],
    class_string: Optional[str],
    state: Optional[SelectorState] = None,
    strings: Optional[UIStrings] = None,
) -> SelectorView:
    """
    Describe the selector UI for the given inputs.

    Args:
        predefined: Predefined classes (read-only)
        class_string: Current class string of the block
        state: Open/search state (default: closed, no search)
        strings: Localized strings

    Returns:
        SelectorView with the trigger summary, option rows (while open)
        and the selected tags
    """
    state = state or SelectorState(class_string=class_string or "")
    strings = strings or UIStrings()
    selected = selected_tokens(predefined, class_string)
    selected_set = set(selected)

    options: list[OptionRow] = []
    if state.is_open:
        options = [
            OptionRow(
                class_name=entry.class_name,
                description=entry.description,
                swatch=extract_hex_color(entry.description),
                selected=entry.class_name in selected_set,
            )
            for entry in visible_options(predefined, state.search_term)
        ]

    return SelectorView(
        label=strings.selector_label,
        trigger_text=trigger_text(len(selected), strings),
        is_open=state.is_open,
        search_term=state.search_term,
        show_clear=state.is_open and bool(selected),
        options=options,
        tags=selected,
    )


class SelectorWidget:
    """
    Stateful selector for one block-editing session.

    States are Closed and Open. The trigger flips between them; an outside
    pointer interaction or an explicit dismiss closes. Closing always clears
    the search term.
    """

    def __init__(
        self,
        predefined: Sequence[ClassEntry],
        class_string: str = "",
        on_change: Optional[Callable[[str], None]] = None,
        strings: Optional[UIStrings] = None,
    ):
        """
        Initialize the selector.

        Args:
            predefined: Predefined classes (read-only for the whole session)
            class_string: Block's current class string
            on_change: Called with the new class string after every change
            strings: Localized strings
        """
        self.predefined = tuple(predefined)
        self.strings = strings or UIStrings()
        self.on_change = on_change
        self.state = SelectorState(class_string=class_string or "")

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def class_string(self) -> str:
        return self.state.class_string

    @property
    def selected_tokens(self) -> list[str]:
        return selected_tokens(self.predefined, self.state.class_string)

    @property
    def visible_options(self) -> list[ClassEntry]:
        return visible_options(self.predefined, self.state.search_term)

    # State machine

    def open(self) -> None:
        self.state.is_open = True

    def close(self) -> None:
        self.state.is_open = False
        self.state.search_term = ""

    def activate_trigger(self) -> None:
        """Trigger activation toggles Open/Closed."""
        if self.state.is_open:
            self.close()
        else:
            self.open()

    def dismiss(self) -> None:
        self.close()

    def pointer_outside(self) -> None:
        if self.state.is_open:
            self.close()

    def set_search(self, term: str) -> None:
        """Update the search term; ignored while closed."""
        if self.state.is_open:
            self.state.search_term = term

    def set_class_string(self, class_string: str) -> None:
        """Adopt a class string changed by the host, without calling on_change."""
        self.state.class_string = class_string or ""

    # Mutations

    def _commit(self, new_class_string: str) -> str:
        self.state.class_string = new_class_string
        if self.on_change is not None:
            self.on_change(new_class_string)
        return new_class_string

    def toggle(self, token: str) -> str:
        """Toggle ``token`` on the class string and report the result."""
        logger.info("user_action_toggle_class", token=token)
        return self._commit(toggle_token(self.state.class_string, token))

    def remove_tag(self, token: str) -> str:
        """Remove a selected tag (tags only exist for selected tokens)."""
        return self.toggle(token)

    def clear_all(self) -> str:
        """Remove every predefined class, keep all other tokens."""
        logger.info("user_action_clear_classes", count=len(self.selected_tokens))
        return self._commit(clear_predefined(self.predefined, self.state.class_string))

    def describe(self) -> SelectorView:
        return describe(self.predefined, self.state.class_string, self.state, self.strings)
