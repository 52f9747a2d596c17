"""Repository search resource client."""

from typing import TYPE_CHECKING

from reposcope.exceptions import ValidationError
from reposcope.query import DEFAULT_SORT, SearchRequest, build_search_request
from reposcope.transport import SEARCH_PATH
from reposcope.types.filters import SortKey
from reposcope.types.results import ResultPage

if TYPE_CHECKING:
    from reposcope.transport import HTTPTransport


class SearchClient:
    """Client for ad-hoc repository search."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the search client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def fetch_page(self, request: SearchRequest) -> ResultPage:
        """
        Send a prepared request and parse the result page.

        Raises:
            RepoScopeError: On transport, status or payload errors
        """
        response = self.transport.get(SEARCH_PATH, params=request.to_params())
        return ResultPage.from_payload(response)

    def search(
        self,
        query: str,
        language: str = "",
        sort: SortKey | str = DEFAULT_SORT,
        page: int = 1,
    ) -> ResultPage:
        """
        Search repositories.

        Results come back 25 per page, in descending order of ``sort``.

        Args:
            query: Free-text query (must not be blank)
            language: Optional language filter
            sort: "stars", "forks", "updated" or "help-wanted-issues"
            page: 1-based page number

        Returns:
            ResultPage with the repositories of that page

        Raises:
            ValidationError: If the query is blank or a filter is invalid
        """
        request = build_search_request(query, language, sort, page)
        if request is None:
            raise ValidationError("EMPTY_QUERY", "Search query must not be blank")
        return self.fetch_page(request)
