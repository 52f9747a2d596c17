"""
reposcope logging utilities.

Provides configurable logging for HTTP requests/responses against the search
endpoint and for fetch/cache decisions. Header values that may carry
credentials are masked, and response bodies are summarized rather than dumped.
"""

import logging
from typing import Any

# Create package-specific loggers
_root_logger = logging.getLogger("reposcope")
_http_logger = logging.getLogger("reposcope.http")
_cache_logger = logging.getLogger("reposcope.cache")

_DEFAULT_SENSITIVE_KEYS = frozenset(
    {"authorization", "token", "cookie", "secret", "password", "api_key"}
)


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    cache_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure reposcope logging.

    Args:
        level: Default log level for all reposcope loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        cache_level: Log level for fetch/cache decisions (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from reposcope.logging import configure_logging

        # Show every request sent to the search endpoint
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _root_logger.setLevel(level)
    _root_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _cache_logger.setLevel(cache_level if cache_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a reposcope logger.

    Args:
        name: Logger name suffix (e.g., "http", "cache"). If None, returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _root_logger
    return logging.getLogger(f"reposcope.{name}")


def safe_log_dict(
    data: dict[str, Any], sensitive_keys: frozenset[str] | set[str] | None = None
) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Keys are matched case-insensitively; a key matches when it contains any of
    the sensitive names (so "X-Api-Token" is masked by "token").

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Names to mask (default: authorization, token, cookie, ...)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        else:
            result[key] = value

    return result


def summarize_payload(body: Any) -> dict[str, Any]:
    """
    Reduce a search response body to the fields worth logging.

    Args:
        body: Parsed JSON body

    Returns:
        Dictionary with total_count, item count and incomplete_results
    """
    if not isinstance(body, dict):
        return {"type": type(body).__name__}

    items = body.get("items")
    return {
        "total_count": body.get("total_count"),
        "items": len(items) if isinstance(items, list) else None,
        "incomplete_results": body.get("incomplete_results"),
    }


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive headers masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL or path
        headers: Request headers (optional)
        params: Query parameters (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if params:
        log_parts.append(f"params={params}")

    if headers:
        log_parts.append(f"headers={safe_log_dict(dict(headers))}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    body: Any = None,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        body: Parsed response body (optional, summarized)
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if body is not None:
        log_parts.append(f"body={summarize_payload(body)}")

    _http_logger.debug(" | ".join(log_parts))


__all__ = [
    "configure_logging",
    "get_logger",
    "safe_log_dict",
    "summarize_payload",
    "log_http_request",
    "log_http_response",
]
