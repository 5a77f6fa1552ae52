"""Feed Paginator — offset/limit windows over the newest-first post feed.

Invariants:
    - offset = (page - 1) * per_page, limit = per_page
    - A page never holds more than per_page items
    - total_items counts the whole collection, independent of the window
    - page falsy (None, 0) means page 1; negative pages are rejected
    - A page past the end yields no items but the same total_items
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from app.core.errors import InputValidationError

FEED_PER_PAGE = 2

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow:
    """Skip/take bounds for one page."""
    page: int
    per_page: int = FEED_PER_PAGE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


@dataclass
class FeedPage(Generic[T]):
    """One page of items plus the full collection count."""
    items: list[T] = field(default_factory=list)
    total_items: int = 0


def page_window(page: int | None, per_page: int = FEED_PER_PAGE) -> PageWindow:
    """Build the window for a requested page number."""
    if per_page < 1:
        raise ValueError("per_page must be positive")
    if not page:
        page = 1
    if page < 1:
        raise InputValidationError("Page must be a positive integer.")
    return PageWindow(page=page, per_page=per_page)


def paginate(
    items: Sequence[T], page: int | None, per_page: int = FEED_PER_PAGE,
) -> FeedPage[T]:
    """Slice an already newest-first sequence into one page."""
    window = page_window(page, per_page)
    return FeedPage(
        items=list(items[window.offset:window.offset + window.limit]),
        total_items=len(items),
    )
