"""
Pagination state for the search and trending controllers.

The search endpoint's ``total_count`` is not trusted for navigation: a page
shorter than the page size is the end of the results.
"""

import dataclasses
from typing import Any, TypeVar

from reposcope.query import PAGE_SIZE

F = TypeVar("F")


class PaginationState:
    """Current page of one controller, never below 1."""

    def __init__(self, page: int = 1, page_size: int = PAGE_SIZE) -> None:
        self.page_size = page_size
        self.page = max(1, page)

    def advance(self) -> int:
        self.page += 1
        return self.page

    def retreat(self) -> int:
        self.page = max(1, self.page - 1)
        return self.page

    def go_to(self, page: int) -> int:
        """Jump to ``page``, clamped to 1."""
        self.page = max(1, page)
        return self.page

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def has_next(self, item_count: int) -> bool:
        """True when the last page came back full."""
        return item_count == self.page_size

    def rank_of(self, index: int) -> int:
        """1-based position across all pages of the item at ``index`` on this page."""
        return (self.page - 1) * self.page_size + index + 1

    def __repr__(self) -> str:
        return f"PaginationState(page={self.page}, page_size={self.page_size})"


def apply_filter_change(filters: F, **changes: Any) -> F:
    """
    Return ``filters`` with ``changes`` applied.

    Setting any field other than ``page`` resets the page to 1, even when the
    new value equals the old one.
    """
    if any(name != "page" for name in changes):
        changes["page"] = 1
    return dataclasses.replace(filters, **changes)  # type: ignore[type-var]
