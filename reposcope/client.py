"""
reposcope main client.

Provides the blocking interface to repository search and trending discovery.
"""

import os
from typing import Any

from reposcope.clients import SearchClient, TrendingClient
from reposcope.exceptions import ConfigurationError
from reposcope.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HTTPTransport


def env_float(name: str, default: float) -> float:
    """
    Read a non-negative float from the environment.

    Raises:
        ConfigurationError: If the variable is set but not a non-negative number
    """
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


class RepoScopeClient:
    """
    Blocking client for repository discovery.

    Example:
        ```python
        from reposcope import RepoScopeClient

        with RepoScopeClient() as client:
            page = client.search.search("raft", language="go")
            weekly = client.trending.get("weekly", language="rust")
        ```
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = DEFAULT_TIMEOUT

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            headers: Extra headers sent with every request
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = HTTPTransport(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
        )

        self.search = SearchClient(self._transport)
        self.trending = TrendingClient(self.search)

    @classmethod
    def from_env(cls, headers: dict[str, str] | None = None) -> "RepoScopeClient":
        """
        Create a client from environment variables.

        Environment variables:
            REPOSCOPE_BASE_URL: Base URL for API (optional, default: https://api.github.com)
            REPOSCOPE_TIMEOUT: Request timeout in seconds (optional, default: 30.0)

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls(
            base_url=os.environ.get("REPOSCOPE_BASE_URL") or cls.DEFAULT_BASE_URL,
            timeout=env_float("REPOSCOPE_TIMEOUT", cls.DEFAULT_TIMEOUT),
            headers=headers,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "RepoScopeClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
