"""
Query building for the repository search endpoint.

Turns filter values into a fully qualified :class:`SearchRequest`. Nothing
here touches the network; the same inputs always build the same request,
and the request's ``key`` is the identity used for caching and dedup.
"""

from dataclasses import dataclass
from datetime import datetime

from reposcope.dates import created_predicate, resolve_date_window
from reposcope.exceptions import ValidationError
from reposcope.types.filters import SortKey, TimeRange

PAGE_SIZE = 25
ORDER = "desc"
DEFAULT_SORT = SortKey.STARS
TRENDING_SORT = SortKey.STARS


@dataclass(frozen=True)
class SearchRequest:
    """Parameters of one call to the search endpoint."""

    q: str
    sort: str
    page: int
    order: str = ORDER
    per_page: int = PAGE_SIZE

    def to_params(self) -> dict[str, str | int]:
        """Query parameters in canonical order."""
        return {
            "q": self.q,
            "sort": self.sort,
            "order": self.order,
            "per_page": self.per_page,
            "page": self.page,
        }

    @property
    def key(self) -> str:
        """Canonical serialization used as the cache and dedup identity."""
        return "&".join(f"{name}={value}" for name, value in self.to_params().items())

    def __str__(self) -> str:
        return self.key


def compose_query(
    text: str = "",
    language: str = "",
    created_after: str | None = None,
) -> str:
    """
    Compose the ``q`` predicate.

    Free text comes first, then ``language:<L>``, then ``created:>DATE``;
    empty parts are skipped.
    """
    parts = [text.strip()]
    if language and language.strip():
        parts.append(f"language:{language.strip()}")
    if created_after:
        parts.append(created_predicate(created_after))
    return " ".join(part for part in parts if part)


def _coerce_sort(sort: SortKey | str) -> SortKey:
    try:
        return SortKey(sort)
    except ValueError:
        allowed = ", ".join(key.value for key in SortKey)
        raise ValidationError(
            "INVALID_SORT", f"Unknown sort key {sort!r}; expected one of {allowed}"
        ) from None


def _check_page(page: int) -> int:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError("INVALID_PAGE", f"Page must be an integer >= 1, got {page!r}")
    return page


def build_search_request(
    free_text: str,
    language: str = "",
    sort: SortKey | str = DEFAULT_SORT,
    page: int = 1,
) -> SearchRequest | None:
    """
    Build the request for an ad-hoc search.

    Args:
        free_text: User query; surrounding whitespace is ignored
        language: Optional language filter ("" for any)
        sort: One of stars, forks, updated, help-wanted-issues
        page: 1-based page number

    Returns:
        The request, or None when the query is blank and nothing should be sent

    Raises:
        ValidationError: On an unknown sort key or a page below 1
    """
    sort_key = _coerce_sort(sort)
    _check_page(page)

    if not free_text or not free_text.strip():
        return None

    return SearchRequest(
        q=compose_query(free_text, language),
        sort=sort_key.value,
        page=page,
    )


def build_trending_request(
    time_range: TimeRange | str,
    language: str = "",
    page: int = 1,
    now: datetime | None = None,
) -> SearchRequest:
    """
    Build the request for trending discovery.

    The created-after predicate leads the query and the language filter
    follows it, e.g. ``created:>2024-05-01 language:rust``.

    Args:
        time_range: "daily", "weekly" or "monthly" (unknown values read as daily)
        language: Optional language filter ("" for any)
        page: 1-based page number
        now: Reference time for the window (default: current UTC time)

    Raises:
        ValidationError: On a page below 1
    """
    _check_page(page)
    predicate = created_predicate(resolve_date_window(time_range, now))
    return SearchRequest(
        q=compose_query(predicate, language),
        sort=TRENDING_SORT.value,
        page=page,
    )
