"""ClassStore: the admin-side source of truth for the predefined class list.

The store owns the ordered list of entries and the current page. The UI
only ever shows one page window at a time; every operation that could
drop the visible edits (navigation, add, delete, save) takes the current
page's edits and writes them back first.

All mutations are synchronous. The two network round-trips (save and
batch import) are async and guarded so each action has at most one
request in flight.
"""

import math
from typing import Any, Optional, Sequence

import structlog

from quickclass.models.class_entry import ClassEntry, ClassList, coerce_entry
from quickclass.models.results import SyncResult
from quickclass.services.backend import BackendGateway
from quickclass.services.exceptions import QuickClassError
from quickclass.utils.text import normalize_class_name

logger = structlog.get_logger()

PAGE_SIZE = 25

PageEdits = Sequence[Any]  # ClassEntry instances or {"class", "description"} mappings


class ClassStore:
    """Ordered, paginated class list with backend synchronization.

    Attributes:
        entries: Authoritative in-memory list (mutated only by store methods)
        current_page: 1-based page shown by the UI, always in range
        page_size: Rows per page
    """

    def __init__(
        self,
        entries: Optional[ClassList] = None,
        page_size: int = PAGE_SIZE,
    ):
        """Initialize the store.

        Args:
            entries: Initial list from the backend (copied)
            page_size: Rows per page (fixed at 25 in production)
        """
        if page_size < 1:
            raise ValueError("page_size must be >= 1")

        self.page_size = page_size
        self.entries: ClassList = []
        self.current_page = 1
        self._in_flight: set[str] = set()
        self._closed = False

        if entries is not None:
            self.load(entries)

    # Pagination

    @property
    def total_pages(self) -> int:
        """Number of pages; an empty list still has one (empty) page."""
        return max(1, math.ceil(len(self.entries) / self.page_size))

    def clamp_page(self, page: int) -> int:
        """Clamp a page number into ``1..total_pages``."""
        return min(max(1, page), self.total_pages)

    def page_offset(self, page: Optional[int] = None) -> int:
        """Global index of the first row of ``page`` (default: current page)."""
        page = self.clamp_page(self.current_page if page is None else page)
        return (page - 1) * self.page_size

    def get_page(self, page: Optional[int] = None) -> ClassList:
        """
        Return copies of the entries in a page window.

        Out-of-range pages are clamped and the clamped value becomes the
        current page.

        Args:
            page: 1-based page number (default: current page)

        Returns:
            At most ``page_size`` entries
        """
        self.current_page = self.clamp_page(self.current_page if page is None else page)
        start = self.page_offset()
        return [entry.model_copy() for entry in self.entries[start:start + self.page_size]]

    def go_to_page(self, page: int, page_edits: Optional[PageEdits] = None) -> ClassList:
        """Flush edits for the current page, then move to ``page`` (clamped)."""
        if page_edits is not None:
            self.sync_page(page_edits)
        window = self.get_page(page)
        logger.debug("class_store_page_changed", page=self.current_page, total=self.total_pages)
        return window

    def next_page(self, page_edits: Optional[PageEdits] = None) -> ClassList:
        """Flush edits, then move one page forward (stays put on the last page)."""
        return self.go_to_page(self.current_page + 1, page_edits)

    def prev_page(self, page_edits: Optional[PageEdits] = None) -> ClassList:
        """Flush edits, then move one page back (stays put on the first page)."""
        return self.go_to_page(self.current_page - 1, page_edits)

    # Mutations

    def load(self, initial: ClassList) -> None:
        """Replace all entries and reset to the first page."""
        self.entries = [coerce_entry(entry) for entry in initial]
        self.current_page = 1
        logger.info("class_store_loaded", count=len(self.entries))

    def sync_page(self, page_edits: PageEdits, page: Optional[int] = None) -> None:
        """
        Overwrite a page window with the edited rows.

        Used for plain field edits and for reorders (a reorder is a
        permutation of the same rows). The window length never changes.

        Args:
            page_edits: Rows as shown on the page, in display order
            page: Page the edits belong to (default: current page)

        Raises:
            ValueError: If the number of rows differs from the window size
        """
        page = self.clamp_page(self.current_page if page is None else page)
        start = (page - 1) * self.page_size
        window_len = len(self.entries[start:start + self.page_size])

        if len(page_edits) != window_len:
            raise ValueError(
                f"Page {page} holds {window_len} rows, got {len(page_edits)} edits"
            )

        self.entries[start:start + window_len] = [coerce_entry(edit) for edit in page_edits]

    def add_entry(self, page_edits: Optional[PageEdits] = None) -> int:
        """
        Append an empty entry and jump to the last page.

        Args:
            page_edits: Unsaved rows of the current page, flushed first

        Returns:
            Global index of the new entry
        """
        if page_edits is not None:
            self.sync_page(page_edits)

        self.entries.append(ClassEntry())
        self.current_page = self.total_pages
        index = len(self.entries) - 1
        logger.info("class_store_entry_added", index=index, page=self.current_page)
        return index

    def delete_entry(self, global_index: int, page_edits: Optional[PageEdits] = None) -> bool:
        """
        Remove the entry at ``global_index``.

        Args:
            global_index: Index into ``entries``
            page_edits: Unsaved rows of the current page, flushed before removal

        Returns:
            True if an entry was removed, False if the index was out of range
        """
        if page_edits is not None:
            self.sync_page(page_edits)

        if not 0 <= global_index < len(self.entries):
            logger.info("class_store_delete_out_of_range", index=global_index, count=len(self.entries))
            return False

        del self.entries[global_index]
        # Deleting the only row of the last page moves back one page
        self.current_page = self.clamp_page(self.current_page)
        logger.info("class_store_entry_deleted", index=global_index, page=self.current_page)
        return True

    def move_within_page(
        self,
        from_index: int,
        to_index: int,
        page_edits: Optional[PageEdits] = None,
    ) -> bool:
        """
        Reorder one row inside the current page.

        Rows cannot leave their page; indices are page-local.

        Args:
            from_index: Page-local index of the row to move
            to_index: Page-local destination index
            page_edits: Unsaved rows of the current page

        Returns:
            True if the order changed
        """
        window = list(page_edits) if page_edits is not None else self.get_page()
        if not (0 <= from_index < len(window) and 0 <= to_index < len(window)):
            if page_edits is not None:
                self.sync_page(page_edits)
            return False

        row = window.pop(from_index)
        window.insert(to_index, row)
        self.sync_page(window)
        return from_index != to_index

    def collect_for_save(self, page_edits: Optional[PageEdits] = None) -> ClassList:
        """
        Build the payload for the backend save.

        Flushes the current page edits, drops entries whose normalized class
        name is empty, normalizes class names and trims descriptions. The
        stored entries themselves are not rewritten.

        Args:
            page_edits: Unsaved rows of the current page

        Returns:
            Candidate list for ``BackendGateway.save``
        """
        if page_edits is not None:
            self.sync_page(page_edits)

        candidate: ClassList = []
        for entry in self.entries:
            class_name = normalize_class_name(entry.class_name)
            if not class_name:
                continue
            candidate.append(
                ClassEntry(class_name=class_name, description=entry.description.strip())
            )
        return candidate

    def replace_after_save(self, canonical: ClassList) -> ClassList:
        """Adopt the backend's canonical list and return the refreshed current page."""
        self.entries = [coerce_entry(entry) for entry in canonical]
        return self.get_page()

    # Backend round-trips

    def is_busy(self, action: str) -> bool:
        """Whether a request for ``action`` ("save" or "import") is in flight."""
        return action in self._in_flight

    def close(self) -> None:
        """Mark the store as discarded; pending round-trips will not apply results."""
        self._closed = True

    async def save(
        self,
        gateway: BackendGateway,
        page_edits: Optional[PageEdits] = None,
    ) -> SyncResult:
        """
        Save the list through the gateway.

        On success the canonical list replaces ``entries``. On any failure
        ``entries`` is left as it was and a failed result is returned.

        Args:
            gateway: Backend gateway
            page_edits: Unsaved rows of the current page

        Returns:
            SyncResult describing the outcome
        """
        if self.is_busy("save"):
            return SyncResult(action="save", success=False, message="Save already in progress")

        candidate = self.collect_for_save(page_edits)
        self._in_flight.add("save")
        logger.info("class_store_save_started", count=len(candidate))

        try:
            canonical = await gateway.save(candidate)
        except QuickClassError as e:
            logger.warning("class_store_save_failed", error=str(e), error_type=type(e).__name__)
            return SyncResult(action="save", success=False, message=str(e))
        finally:
            self._in_flight.discard("save")

        if self._closed:
            logger.info("class_store_save_result_discarded")
            return SyncResult(action="save", success=True, classes=canonical)

        self.replace_after_save(canonical)
        logger.info("class_store_save_succeeded", count=len(canonical))
        return SyncResult(action="save", success=True, classes=canonical)

    async def batch_import(
        self,
        gateway: BackendGateway,
        raw_text: str,
        page_edits: Optional[PageEdits] = None,
    ) -> SyncResult:
        """
        Forward raw import text to the gateway.

        The text is not parsed here. On success the returned canonical list
        replaces ``entries``; on failure nothing changes.

        Args:
            gateway: Backend gateway
            raw_text: Bulk text as entered by the user
            page_edits: Unsaved rows of the current page

        Returns:
            SyncResult with the backend's message
        """
        if self.is_busy("import"):
            return SyncResult(action="import", success=False, message="Import already in progress")

        if page_edits is not None:
            self.sync_page(page_edits)

        self._in_flight.add("import")
        logger.info("class_store_import_started", size=len(raw_text))

        try:
            message, canonical = await gateway.batch_import(raw_text)
        except QuickClassError as e:
            logger.warning("class_store_import_failed", error=str(e), error_type=type(e).__name__)
            return SyncResult(action="import", success=False, message=str(e))
        finally:
            self._in_flight.discard("import")

        if not self._closed:
            self.replace_after_save(canonical)
        logger.info("class_store_import_succeeded", count=len(canonical))
        return SyncResult(action="import", success=True, message=message, classes=canonical)
