"""
Query controllers for the search and trending views.

A controller holds the active filters of one view, turns them into a
:class:`SearchRequest`, resolves it through a shared :class:`FetchCache` and
exposes the outcome as an immutable :class:`Snapshot`.

Each issued request takes the next value of a per-controller counter. A
response only updates the snapshot when its counter is still the current one,
so a slow answer to an old query never overwrites a newer one.
"""

import dataclasses
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from reposcope.cache import FetchCache
from reposcope.dates import coerce_time_range
from reposcope.exceptions import RepoScopeError, ValidationError
from reposcope.logging import get_logger
from reposcope.pagination import PaginationState, apply_filter_change
from reposcope.query import PAGE_SIZE, SearchRequest, build_search_request, build_trending_request
from reposcope.types.filters import SearchFilters, SortKey, TimeRange, TrendingFilters
from reposcope.types.repos import Repository
from reposcope.types.results import ResultPage

logger = get_logger()

Listener = Callable[["Snapshot"], None]


class ControllerStatus(str, Enum):
    """Lifecycle of a controller's current request."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view state handed to the presentation surface."""

    items: tuple[Repository, ...] = ()
    total_count: int = 0
    page: int = 1
    is_loading: bool = False
    is_validating: bool = False
    error: Exception | None = None
    has_next: bool = False
    has_previous: bool = False
    status: ControllerStatus = ControllerStatus.IDLE
    key: str | None = None
    first_rank: int = 1

    def ranked(self) -> Iterator[tuple[int, Repository]]:
        """Yield ``(rank, repository)`` pairs, ranks continuing across pages."""
        for index, repo in enumerate(self.items):
            yield self.first_rank + index, repo


class QueryController:
    """Shared state machine of the search and trending controllers."""

    filter_fields: frozenset[str] = frozenset()

    def __init__(self, cache: FetchCache, filters: Any, page_size: int = PAGE_SIZE) -> None:
        self._cache = cache
        self._pagination = PaginationState(filters.page, page_size)
        self._filters = dataclasses.replace(filters, page=self._pagination.page)
        self._counter = 0
        self._request: SearchRequest | None = None
        self._current: ResultPage | None = None
        self._stale: ResultPage | None = None
        self._error: Exception | None = None
        self._loading = False
        self._listeners: list[Listener] = []

    def build_request(self) -> SearchRequest | None:
        """Build the request for the current filters, or None when inactive."""
        raise NotImplementedError

    @property
    def filters(self) -> Any:
        return self._filters

    @property
    def page(self) -> int:
        return self._pagination.page

    @property
    def snapshot(self) -> Snapshot:
        if self._error is not None:
            items: tuple[Repository, ...] = ()
            total_count = 0
        elif self._current is not None:
            items, total_count = self._current.items, self._current.total_count
        elif self._loading and self._stale is not None:
            items, total_count = self._stale.items, self._stale.total_count
        else:
            items, total_count = (), 0

        if self._loading:
            status = ControllerStatus.LOADING
        elif self._error is not None:
            status = ControllerStatus.ERRORED
        elif self._current is not None:
            status = ControllerStatus.LOADED
        else:
            status = ControllerStatus.IDLE

        has_next = (
            status is ControllerStatus.LOADED
            and self._current is not None
            and self._pagination.has_next(len(self._current.items))
        )

        return Snapshot(
            items=items,
            total_count=total_count,
            page=self._pagination.page,
            is_loading=self._loading and self._current is None,
            is_validating=self._loading,
            error=self._error,
            has_next=has_next,
            has_previous=self._pagination.has_previous,
            status=status,
            key=self._request.key if self._request is not None else None,
            first_rank=self._pagination.rank_of(0),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call ``listener`` with every new snapshot.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_filter_change(self, **changes: Any) -> SearchRequest | None:
        """
        Apply filter changes without fetching.

        Any change resets the page to 1.

        Returns:
            The request the new filters build, or None when inactive

        Raises:
            ValidationError: On an unknown filter name or value
        """
        unknown = set(changes) - self.filter_fields
        if unknown:
            raise ValidationError(
                "INVALID_FILTER", f"Unknown filter(s): {', '.join(sorted(unknown))}"
            )
        self._filters = apply_filter_change(self._filters, **self._coerce(changes))
        self._pagination.go_to(self._filters.page)
        return self.build_request()

    def on_page_change(self, page: int) -> SearchRequest | None:
        """
        Move to ``page`` (clamped to 1) without fetching.

        Returns:
            The request for that page, or None when inactive
        """
        self._pagination.go_to(page)
        self._filters = dataclasses.replace(self._filters, page=self._pagination.page)
        return self.build_request()

    async def set_filter(self, **changes: Any) -> Snapshot:
        """Change filters, back to page 1, and load the result."""
        self.on_filter_change(**changes)
        return await self._load()

    async def next_page(self) -> Snapshot:
        """Load the next page; does nothing unless ``has_next``."""
        if not self.snapshot.has_next:
            logger.debug("next_page ignored on page %d", self.page)
            return self.snapshot
        self.on_page_change(self._pagination.advance())
        return await self._load()

    async def previous_page(self) -> Snapshot:
        """Load the previous page; does nothing on page 1."""
        if not self._pagination.has_previous:
            return self.snapshot
        self.on_page_change(self._pagination.retreat())
        return await self._load()

    async def refresh(self) -> Snapshot:
        """Load the current filters, reusing cached or in-flight results."""
        return await self._load()

    async def retry(self) -> Snapshot:
        """Reissue the current request, bypassing the cache. The page is kept."""
        return await self._load(force=True)

    def _coerce(self, changes: dict[str, Any]) -> dict[str, Any]:
        return changes

    def _publish(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    async def _load(self, force: bool = False) -> Snapshot:
        request = self.build_request()
        self._counter += 1
        ticket = self._counter

        if request is None:
            self._request = None
            self._current = None
            self._stale = None
            self._error = None
            self._loading = False
            self._publish()
            return self.snapshot

        if self._request is None or request.key != self._request.key:
            if self._current is not None:
                self._stale = self._current
            elif not self._loading:
                self._stale = None
            self._request = request
            self._current = self._cache.peek(request.key)

        self._error = None
        self._loading = True
        self._publish()

        try:
            page = await self._cache.fetch(request, force=force)
        except RepoScopeError as exc:
            if ticket != self._counter:
                logger.debug("Dropping stale failure for %s", request.key)
                return self.snapshot
            logger.info("Request %s failed: %s", request.key, exc)
            self._current = None
            self._error = exc
        except BaseException:
            if ticket == self._counter:
                self._stale = None
                self._loading = False
                self._publish()
            raise
        else:
            if ticket != self._counter:
                logger.debug("Dropping stale result for %s", request.key)
                return self.snapshot
            self._current = page

        self._stale = None
        self._loading = False
        self._publish()
        return self.snapshot


class SearchController(QueryController):
    """
    Controller of the ad-hoc search view.

    Typing only edits a draft; ``submit`` makes it the active query. Language
    and sort changes apply at once to the submitted query. Until a non-blank
    query is submitted the controller stays idle and sends nothing.
    """

    filter_fields = frozenset({"free_text", "language", "sort"})

    def __init__(
        self,
        cache: FetchCache,
        filters: SearchFilters | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        super().__init__(cache, filters or SearchFilters(), page_size)
        self.draft = self._filters.free_text

    def build_request(self) -> SearchRequest | None:
        return build_search_request(
            self._filters.free_text,
            self._filters.language,
            self._filters.sort,
            self._filters.page,
        )

    def set_query(self, text: str) -> None:
        """Edit the draft query; nothing is sent until ``submit``."""
        self.draft = text

    async def submit(self, text: str | None = None) -> Snapshot:
        """
        Make the draft (or ``text``) the active query and load page 1.

        A blank query is ignored and the previous query stays active.
        """
        if text is not None:
            self.draft = text
        query = self.draft.strip()
        if not query:
            logger.debug("Ignoring blank search submit")
            return self.snapshot
        return await self.set_filter(free_text=query)

    def _coerce(self, changes: dict[str, Any]) -> dict[str, Any]:
        if "sort" in changes:
            try:
                changes["sort"] = SortKey(changes["sort"])
            except ValueError:
                raise ValidationError(
                    "INVALID_SORT", f"Unknown sort key {changes['sort']!r}"
                ) from None
        if "free_text" in changes:
            changes["free_text"] = (changes["free_text"] or "").strip()
        return changes


class TrendingController(QueryController):
    """
    Controller of the trending view.

    Filters apply immediately; there is no submit step. The window bound is
    recomputed from ``now`` every time a request is built.
    """

    filter_fields = frozenset({"range", "language"})

    def __init__(
        self,
        cache: FetchCache,
        filters: TrendingFilters | None = None,
        page_size: int = PAGE_SIZE,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(cache, filters or TrendingFilters(), page_size)
        self._now = now

    def build_request(self) -> SearchRequest:
        return build_trending_request(
            self._filters.range,
            self._filters.language,
            self._filters.page,
            self._now() if self._now is not None else None,
        )

    async def set_range(self, time_range: TimeRange | str) -> Snapshot:
        return await self.set_filter(range=time_range)

    async def set_language(self, language: str) -> Snapshot:
        return await self.set_filter(language=language)

    def _coerce(self, changes: dict[str, Any]) -> dict[str, Any]:
        if "range" in changes:
            changes["range"] = coerce_time_range(changes["range"])
        return changes
