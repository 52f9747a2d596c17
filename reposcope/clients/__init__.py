"""reposcope resource clients."""

from reposcope.clients.search import SearchClient
from reposcope.clients.trending import TrendingClient

__all__ = [
    "SearchClient",
    "TrendingClient",
]
