"""
HTTP Transport for reposcope.

Handles HTTP communication with the repository search endpoint and turns
failures into typed exceptions. There is no automatic retry: the search API
is rate limited, so re-issuing a request is left to the caller.
"""

import time
from datetime import datetime, timezone
from typing import Any

import httpx

from reposcope.exceptions import (
    HTTPStatusError,
    MalformedResponseError,
    NotFoundError,
    RateLimitedError,
    RepoScopeError,
    ServerError,
    TransportError,
    ValidationError,
)
from reposcope.logging import log_http_request, log_http_response

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
SEARCH_PATH = "/search/repositories"
ACCEPT = "application/vnd.github.v3+json"
USER_AGENT = "reposcope/0.1.0"
DEFAULT_RETRY_AFTER = 60


def default_headers(extra: dict[str, str] | None = None) -> dict[str, str]:
    """Headers sent with every request; ``extra`` entries win."""
    headers = {"Accept": ACCEPT, "User-Agent": USER_AGENT}
    if extra:
        headers.update(extra)
    return headers


def decode_response(response: httpx.Response) -> Any:
    """
    Decode a response from the search endpoint.

    Args:
        response: HTTP response

    Returns:
        Parsed JSON body of a 2xx response

    Raises:
        RepoScopeError: On a non-2xx status or a body that is not JSON
    """
    if not response.is_success:
        raise parse_error_response(response)

    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(
            f"Response body is not JSON: {e}",
            response.headers.get("X-GitHub-Request-Id"),
        ) from e


def _retry_after(response: httpx.Response) -> int:
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return max(0, int(retry_after))
        except ValueError:
            pass

    reset = response.headers.get("X-RateLimit-Reset")
    if reset:
        try:
            reset_at = int(reset)
        except ValueError:
            return DEFAULT_RETRY_AFTER
        return max(0, reset_at - int(datetime.now(timezone.utc).timestamp()))

    return DEFAULT_RETRY_AFTER


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return response.status_code == 403 and (
        response.headers.get("X-RateLimit-Remaining") == "0"
        or "Retry-After" in response.headers
    )


def parse_error_response(response: httpx.Response) -> RepoScopeError:
    """
    Parse an error response into a typed exception.

    Args:
        response: HTTP response with a non-2xx status

    Returns:
        Appropriate RepoScopeError subclass
    """
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    status_code = response.status_code
    message = data.get("message") or f"HTTP {status_code}"
    request_id = response.headers.get("X-GitHub-Request-Id")

    if _is_rate_limited(response):
        return RateLimitedError(
            "RATE_LIMITED", message, _retry_after(response), request_id
        )
    elif status_code == 404:
        return NotFoundError("NOT_FOUND", message, request_id)
    elif status_code == 422:
        return ValidationError("VALIDATION_FAILED", message, request_id)
    elif status_code >= 500:
        return ServerError("SERVER_ERROR", message, request_id)
    else:
        return HTTPStatusError(f"HTTP_{status_code}", message, status_code, request_id)


class HTTPTransport:
    """
    Blocking HTTP transport for the search endpoint.

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
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            timeout: Request timeout in seconds
            headers: Extra headers sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = default_headers(headers)

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=self.headers,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
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
            response = self._client.request("GET", path, params=params)
        except httpx.TimeoutException as e:
            raise TransportError("TIMEOUT", str(e)) from e
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", str(e)) from e

        body = decode_response(response)
        log_http_response(
            response.status_code, path, body, (time.perf_counter() - started) * 1000
        )
        return body
