"""Async repository search resource client."""

from typing import TYPE_CHECKING

from reposcope.exceptions import ValidationError
from reposcope.query import DEFAULT_SORT, SearchRequest, build_search_request
from reposcope.transport import SEARCH_PATH
from reposcope.types.filters import SortKey
from reposcope.types.results import ResultPage

if TYPE_CHECKING:
    from reposcope.async_transport import AsyncHTTPTransport


class AsyncSearchClient:
    """Async client for ad-hoc repository search."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async search client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def fetch_page(self, request: SearchRequest) -> ResultPage:
        """
        Send a prepared request and parse the result page.

        This is the fetcher the cache layer calls.
        """
        response = await self.transport.get(SEARCH_PATH, params=request.to_params())
        return ResultPage.from_payload(response)

    async def search(
        self,
        query: str,
        language: str = "",
        sort: SortKey | str = DEFAULT_SORT,
        page: int = 1,
    ) -> ResultPage:
        """
        Search repositories.

        Args:
            query: Free-text query (must not be blank)
            language: Optional language filter
            sort: "stars", "forks", "updated" or "help-wanted-issues"
            page: 1-based page number

        Returns:
            ResultPage with the repositories of that page
        """
        request = build_search_request(query, language, sort, page)
        if request is None:
            raise ValidationError("EMPTY_QUERY", "Search query must not be blank")
        return await self.fetch_page(request)
