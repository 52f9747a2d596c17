"""Async trending resource client."""

from datetime import datetime
from typing import TYPE_CHECKING

from reposcope.query import build_trending_request
from reposcope.types.filters import TimeRange
from reposcope.types.results import ResultPage

if TYPE_CHECKING:
    from reposcope.async_clients.search import AsyncSearchClient


class AsyncTrendingClient:
    """Async client for trending repository discovery."""

    def __init__(self, search: "AsyncSearchClient") -> None:
        """
        Initialize the async trending client.

        Args:
            search: Async search client the trending queries are sent through
        """
        self.search = search

    async def get(
        self,
        time_range: TimeRange | str = TimeRange.DAILY,
        language: str = "",
        page: int = 1,
        now: datetime | None = None,
    ) -> ResultPage:
        """
        Get trending repositories.

        Args:
            time_range: "daily", "weekly" or "monthly" (default: "daily")
            language: Optional language filter
            page: 1-based page number
            now: Reference time for the window (default: current UTC time)

        Returns:
            ResultPage sorted by stars, descending
        """
        request = build_trending_request(time_range, language, page, now)
        return await self.search.fetch_page(request)
