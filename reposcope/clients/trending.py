"""Trending resource client."""

from datetime import datetime
from typing import TYPE_CHECKING

from reposcope.query import build_trending_request
from reposcope.types.filters import TimeRange
from reposcope.types.results import ResultPage

if TYPE_CHECKING:
    from reposcope.clients.search import SearchClient


class TrendingClient:
    """Client for trending repository discovery."""

    def __init__(self, search: "SearchClient") -> None:
        """
        Initialize the trending client.

        Args:
            search: Search client the trending queries are sent through
        """
        self.search = search

    def get(
        self,
        time_range: TimeRange | str = TimeRange.DAILY,
        language: str = "",
        page: int = 1,
        now: datetime | None = None,
    ) -> ResultPage:
        """
        Get trending repositories.

        Trending means created within the window and ranked by stars.

        Args:
            time_range: "daily", "weekly" or "monthly" (default: "daily")
            language: Optional language filter
            page: 1-based page number
            now: Reference time for the window (default: current UTC time)

        Returns:
            ResultPage sorted by stars, descending
        """
        request = build_trending_request(time_range, language, page, now)
        return self.search.fetch_page(request)
