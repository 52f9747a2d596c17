"""
reposcope async client.

Provides the async interface, and the controllers that drive the search and
trending views on top of one shared fetch cache.
"""

import os
from collections.abc import Callable, MutableMapping
from datetime import datetime
from typing import Any

from reposcope.async_clients import AsyncSearchClient, AsyncTrendingClient
from reposcope.async_transport import AsyncHTTPTransport
from reposcope.cache import DEFAULT_DEDUPE_INTERVAL, CacheEntry, FetchCache
from reposcope.client import env_float
from reposcope.controllers import SearchController, TrendingController
from reposcope.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from reposcope.types.filters import SearchFilters, TrendingFilters


class AsyncRepoScopeClient:
    """
    Async client for repository discovery.

    Example:
        ```python
        import asyncio
        from reposcope import AsyncRepoScopeClient

        async def main():
            async with AsyncRepoScopeClient() as client:
                trending = client.trending_controller()
                snapshot = await trending.set_range("weekly")
                for rank, repo in snapshot.ranked():
                    print(rank, repo.full_name)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = DEFAULT_TIMEOUT
    DEFAULT_DEDUPE_INTERVAL = DEFAULT_DEDUPE_INTERVAL

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        dedupe_interval: float = DEFAULT_DEDUPE_INTERVAL,
        cache_store: MutableMapping[str, CacheEntry] | None = None,
    ) -> None:
        """
        Initialize the async client.

        Args:
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            headers: Extra headers sent with every request
            dedupe_interval: Seconds a cached page is reused without refetching
            cache_store: Mapping backing the fetch cache (default: a new dict)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
        )

        self.search = AsyncSearchClient(self._transport)
        self.trending = AsyncTrendingClient(self.search)
        self.cache = FetchCache(
            self.search.fetch_page,
            store=cache_store,
            dedupe_interval=dedupe_interval,
        )

    @classmethod
    def from_env(
        cls,
        headers: dict[str, str] | None = None,
        cache_store: MutableMapping[str, CacheEntry] | None = None,
    ) -> "AsyncRepoScopeClient":
        """
        Create an async client from environment variables.

        Environment variables:
            REPOSCOPE_BASE_URL: Base URL for API (optional, default: https://api.github.com)
            REPOSCOPE_TIMEOUT: Request timeout in seconds (optional, default: 30.0)
            REPOSCOPE_DEDUPE_INTERVAL: Cache dedupe window in seconds (optional, default: 2.0)

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls(
            base_url=os.environ.get("REPOSCOPE_BASE_URL") or cls.DEFAULT_BASE_URL,
            timeout=env_float("REPOSCOPE_TIMEOUT", cls.DEFAULT_TIMEOUT),
            headers=headers,
            dedupe_interval=env_float(
                "REPOSCOPE_DEDUPE_INTERVAL", cls.DEFAULT_DEDUPE_INTERVAL
            ),
            cache_store=cache_store,
        )

    def search_controller(self, filters: SearchFilters | None = None) -> SearchController:
        """Create a search controller backed by this client's cache."""
        return SearchController(self.cache, filters)

    def trending_controller(
        self,
        filters: TrendingFilters | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> TrendingController:
        """Create a trending controller backed by this client's cache."""
        return TrendingController(self.cache, filters, now=now)

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncRepoScopeClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
