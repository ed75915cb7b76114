"""Client-side pagination of already-fetched collections."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Sequence, TypeVar

from inventory_client.core.exceptions import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    """One page of a collection plus the total page count."""

    page_items: List[T] = field(default_factory=list)
    total_pages: int = 0


def paginate(items: Sequence[T], page_size: int, page_number: int) -> PageWindow[T]:
    """
    Slice ``items`` to the 1-based page ``page_number``.

    Items keep the caller's order. A page outside ``1..total_pages`` yields
    an empty slice rather than an error, since a view can briefly ask for a
    stale page after a filter shrinks the collection.

    Raises:
        ValidationError: If ``page_size`` is not positive
    """
    if page_size <= 0:
        raise ValidationError("page_size must be positive", details={"page_size": page_size})

    total_pages = math.ceil(len(items) / page_size)
    if page_number < 1:
        return PageWindow(page_items=[], total_pages=total_pages)

    start = (page_number - 1) * page_size
    return PageWindow(page_items=list(items[start:start + page_size]), total_pages=total_pages)


def visible_page_numbers(total_pages: int) -> List[int]:
    """Page numbers for a page selector, ascending from 1."""
    return list(range(1, total_pages + 1))


def on_page_select(requested: int, total_pages: int) -> Optional[int]:
    """Accept ``requested`` only if it names an existing page."""
    if 1 <= requested <= total_pages:
        return requested
    return None


class PageCursor:
    """Current-page bookkeeping for a paginated list view."""

    def __init__(self, items_per_page: int = 10, current_page: int = 1):
        if items_per_page <= 0:
            raise ValidationError(
                "items_per_page must be positive", details={"items_per_page": items_per_page}
            )
        self.items_per_page = items_per_page
        self.current_page = current_page
        self.total_pages = 0

    def window(self, items: Sequence[T]) -> PageWindow[T]:
        """Paginate ``items`` at the current page and remember the page count."""
        page = paginate(items, self.items_per_page, self.current_page)
        self.total_pages = page.total_pages
        return page

    def select(self, requested: int, total_pages: Optional[int] = None) -> bool:
        """Move to ``requested`` if valid; returns whether the page changed."""
        total = self.total_pages if total_pages is None else total_pages
        accepted = on_page_select(requested, total)
        if accepted is None:
            return False
        self.current_page = accepted
        return True

    def reset(self) -> None:
        """Go back to the first page, e.g. after the search text changes."""
        self.current_page = 1

    @property
    def page_numbers(self) -> List[int]:
        return visible_page_numbers(self.total_pages)
