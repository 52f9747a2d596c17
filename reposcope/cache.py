"""
Fetch/cache layer for search requests.

:class:`FetchCache` owns a mapping from request key to :class:`CacheEntry`.
It is the only writer of that mapping; controllers read through ``fetch``,
``entry`` and ``peek``.

- Concurrent fetches of one key share a single in-flight task.
- A successful entry younger than ``dedupe_interval`` is served without a
  network call unless the fetch is forced.
- Every issued fetch is tagged with a per-key generation; a completion whose
  generation was superseded (forced refetch, ``invalidate``) is not stored.
- Nothing is refetched on its own: only a new key or ``force=True`` reaches
  the network.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from enum import Enum

from reposcope.logging import get_logger
from reposcope.query import SearchRequest
from reposcope.types.results import ResultPage

logger = get_logger("cache")

Fetcher = Callable[[SearchRequest], Awaitable[ResultPage]]

DEFAULT_DEDUPE_INTERVAL = 2.0


class EntryStatus(str, Enum):
    """State of a cache slot."""

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class CacheEntry:
    """What the cache holds for one request key."""

    status: EntryStatus
    page: ResultPage | None = None
    error: Exception | None = None
    updated_at: float = 0.0


class FetchCache:
    """
    Deduplicating, stale-tolerant cache in front of a search fetcher.

    Example:
        ```python
        cache = FetchCache(client.search.fetch_page)
        page = await cache.fetch(build_search_request("raft", "go"))
        ```
    """

    def __init__(
        self,
        fetcher: Fetcher,
        store: MutableMapping[str, CacheEntry] | None = None,
        dedupe_interval: float = DEFAULT_DEDUPE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            fetcher: Async callable performing the network request
            store: Mapping that holds the entries (default: a new dict)
            dedupe_interval: Seconds a successful entry is served without refetching
            clock: Monotonic time source in seconds
        """
        self._fetcher = fetcher
        self._store = store if store is not None else {}
        self.dedupe_interval = dedupe_interval
        self._clock = clock
        self._inflight: dict[str, "asyncio.Task[ResultPage]"] = {}
        self._generations: dict[str, int] = {}

    async def fetch(self, request: SearchRequest, force: bool = False) -> ResultPage:
        """
        Fetch the result page for ``request``.

        Args:
            request: Request to resolve
            force: Skip dedup and reissue the request (manual retry)

        Returns:
            The result page

        Raises:
            RepoScopeError: Whatever the fetcher raised; every caller sharing
                the in-flight request receives the same exception
        """
        key = request.key

        if not force:
            task = self._inflight.get(key)
            if task is not None:
                logger.debug("Joining in-flight fetch for %s", key)
                return await asyncio.shield(task)

            entry = self._store.get(key)
            if entry is not None and self._is_fresh(entry):
                logger.debug("Serving %s from cache", key)
                return entry.page

        task = self._start(request)
        return await asyncio.shield(task)

    def entry(self, key: str) -> CacheEntry | None:
        """Return the entry stored for ``key``, if any."""
        return self._store.get(key)

    def peek(self, key: str) -> ResultPage | None:
        """Return the last successful page for ``key`` without fetching."""
        entry = self._store.get(key)
        return entry.page if entry is not None else None

    def is_pending(self, key: str) -> bool:
        return key in self._inflight

    def invalidate(self, key: str) -> None:
        """Drop ``key``; a fetch still in flight for it will not be stored."""
        self._store.pop(key, None)
        self._inflight.pop(key, None)
        self._generations[key] = self._generations.get(key, 0) + 1

    def clear(self) -> None:
        """Drop every entry."""
        for key in set(self._store) | set(self._inflight):
            self.invalidate(key)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return (
            entry.status is EntryStatus.SUCCESS
            and entry.page is not None
            and self._clock() - entry.updated_at < self.dedupe_interval
        )

    def _start(self, request: SearchRequest) -> "asyncio.Task[ResultPage]":
        key = request.key
        generation = self._generations.get(key, 0) + 1
        self._generations[key] = generation

        previous = self._store.get(key)
        self._store[key] = CacheEntry(
            status=EntryStatus.PENDING,
            page=previous.page if previous is not None else None,
            updated_at=previous.updated_at if previous is not None else 0.0,
        )

        task = asyncio.ensure_future(self._run(request, generation, previous))
        self._inflight[key] = task
        logger.debug("Fetching %s (generation %d)", key, generation)
        return task

    async def _run(
        self,
        request: SearchRequest,
        generation: int,
        previous: CacheEntry | None,
    ) -> ResultPage:
        key = request.key
        try:
            page = await self._fetcher(request)
        except Exception as exc:
            if self._generations.get(key) == generation:
                self._store[key] = CacheEntry(
                    status=EntryStatus.ERROR, error=exc, updated_at=self._clock()
                )
                logger.warning("Fetch failed for %s: %s", key, exc)
            else:
                logger.debug("Discarding superseded failure for %s", key)
            raise
        else:
            if self._generations.get(key) == generation:
                self._store[key] = CacheEntry(
                    status=EntryStatus.SUCCESS, page=page, updated_at=self._clock()
                )
                logger.debug("Stored %d items for %s", len(page.items), key)
            else:
                logger.debug("Discarding superseded result for %s", key)
            return page
        finally:
            if self._inflight.get(key) is asyncio.current_task():
                del self._inflight[key]
            current = self._store.get(key)
            if (
                self._generations.get(key) == generation
                and current is not None
                and current.status is EntryStatus.PENDING
            ):
                # cancelled before settling
                if previous is not None:
                    self._store[key] = previous
                else:
                    del self._store[key]
