"""reposcope - GitHub repository search and trending discovery."""

from reposcope.async_client import AsyncRepoScopeClient
from reposcope.cache import CacheEntry, EntryStatus, FetchCache
from reposcope.client import RepoScopeClient
from reposcope.controllers import (
    ControllerStatus,
    SearchController,
    Snapshot,
    TrendingController,
)
from reposcope.dates import resolve_date_window, subtract_months
from reposcope.exceptions import (
    ConfigurationError,
    HTTPStatusError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    RepoScopeError,
    ServerError,
    TransportError,
    ValidationError,
)
from reposcope.logging import configure_logging, get_logger
from reposcope.pagination import PaginationState
from reposcope.query import (
    PAGE_SIZE,
    SearchRequest,
    build_search_request,
    build_trending_request,
)
from reposcope.types import (
    Repository,
    ResultPage,
    SearchFilters,
    SortKey,
    TimeRange,
    TrendingFilters,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Clients
    "RepoScopeClient",
    "AsyncRepoScopeClient",
    # Controllers
    "SearchController",
    "TrendingController",
    "Snapshot",
    "ControllerStatus",
    # Cache
    "FetchCache",
    "CacheEntry",
    "EntryStatus",
    # Query building
    "PAGE_SIZE",
    "SearchRequest",
    "build_search_request",
    "build_trending_request",
    "resolve_date_window",
    "subtract_months",
    "PaginationState",
    # Types
    "Repository",
    "ResultPage",
    "SearchFilters",
    "TrendingFilters",
    "SortKey",
    "TimeRange",
    # Exceptions
    "RepoScopeError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "HTTPStatusError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "MalformedResponseError",
    # Logging
    "configure_logging",
    "get_logger",
]
