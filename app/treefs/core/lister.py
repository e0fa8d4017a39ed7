"""Marker-resumable, size-capped directory listings.

Clients page through a tree by passing the last path of each page as the
``marker`` of the next request until a page comes back not truncated.
No snapshot is taken between requests, so concurrent changes may shift,
drop, or repeat entries.
"""

import contextlib
import logging

from treefs.core.walker import Decision, iter_tree, select
from treefs.models import DirEntry, ListingPage

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 1000
DEFAULT_PAGE_SIZE = 100


def clamp_page_size(max_items: int) -> int:
    """Clamp a requested page size to [MIN_PAGE_SIZE, MAX_PAGE_SIZE]."""
    return min(max(max_items, MIN_PAGE_SIZE), MAX_PAGE_SIZE)


class _PageCollector:
    """Traversal filter that fills one page.

    Entries up to and including ``marker`` are skipped. Once the page is
    full, the next entry stops the traversal and marks the page truncated.
    """

    def __init__(self, marker: str | None, max_items: int) -> None:
        self._marker = marker or None
        self._remaining = max_items
        self.truncated = False

    def __call__(self, entry: DirEntry) -> Decision:
        if self._remaining == 0:
            self.truncated = True
            return Decision.STOP
        if self._marker is not None:
            if entry.path == self._marker:
                self._marker = None
            return Decision.SKIP
        self._remaining -= 1
        return Decision.KEEP


def list_tree(
    directory: str,
    expand: bool = False,
    marker: str | None = None,
    max_items: int = DEFAULT_PAGE_SIZE,
) -> ListingPage:
    """List a directory one page at a time.

    Args:
        directory: Directory to list.
        expand: Include the contents of subdirectories, each directly
            after its directory entry.
        marker: Resume after this exact path. A marker that never matches
            yields an empty page.
        max_items: Page size, clamped to [1, 1000].

    Returns:
        ListingPage; empty and not truncated if the directory cannot be
        read.
    """
    collect = _PageCollector(marker, clamp_page_size(max_items))
    try:
        with contextlib.closing(iter_tree(directory, expand)) as entries:
            contents = [entry.path for entry in select(entries, collect)]
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return ListingPage()
    return ListingPage(truncated=collect.truncated, contents=contents)
