"""
Async HTTP Transport for reposcope.

Handles async HTTP communication with the repository search endpoint using
the httpx async client. Error handling is shared with the blocking transport.
"""

import time
from typing import Any

import httpx

from reposcope.exceptions import TransportError
from reposcope.logging import log_http_request, log_http_response
from reposcope.transport import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    decode_response,
    default_headers,
)


class AsyncHTTPTransport:
    """
    Async HTTP transport for the search endpoint.

    Handles:
    - The versioned JSON Accept header on every request
    - Request/response debug logging
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = default_headers(headers)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=self.headers,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Make a GET request.

        Args:
            path: API path (e.g., "/search/repositories")
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            RepoScopeError: On transport, status or decoding errors
        """
        log_http_request("GET", path, self.headers, params)
        started = time.perf_counter()

        try:
            response = await self._client.request("GET", path, params=params)
        except httpx.TimeoutException as e:
            raise TransportError("TIMEOUT", str(e)) from e
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", str(e)) from e

        body = decode_response(response)
        log_http_response(
            response.status_code, path, body, (time.perf_counter() - started) * 1000
        )
        return body
