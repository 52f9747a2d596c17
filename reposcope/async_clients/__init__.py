"""reposcope async resource clients."""

from reposcope.async_clients.search import AsyncSearchClient
from reposcope.async_clients.trending import AsyncTrendingClient

__all__ = [
    "AsyncSearchClient",
    "AsyncTrendingClient",
]
