"""
Property-based tests for reposcope logging.

Feature: logging
"""

import io
import logging

from hypothesis import given, settings
from hypothesis import strategies as st

from reposcope.logging import (
    configure_logging,
    get_logger,
    log_http_request,
    log_http_response,
    safe_log_dict,
    summarize_payload,
)

token_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_"),
    min_size=20,
    max_size=60,
)


def capture(logger_name: str) -> tuple[io.StringIO, logging.Handler]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
    logging.getLogger(logger_name).addHandler(handler)
    return stream, handler


@given(token=token_strategy)
@settings(max_examples=100)
def test_property_credentials_never_logged(token: str) -> None:
    """
    For any credential-bearing header, the logged request line SHALL NOT
    contain the credential value.
    """
    logger = get_logger("http")
    logger.setLevel(logging.DEBUG)
    stream, handler = capture("reposcope.http")
    try:
        log_http_request(
            "GET",
            "/search/repositories",
            headers={"Authorization": f"token {token}", "Accept": "application/json"},
            params={"q": "raft"},
        )
    finally:
        logging.getLogger("reposcope.http").removeHandler(handler)

    output = stream.getvalue()
    assert token not in output
    assert "[REDACTED]" in output
    assert "application/json" in output


def test_safe_log_dict_masks_nested_values() -> None:
    data = {"headers": {"X-Api-Token": "abc", "Accept": "json"}, "q": "raft"}

    masked = safe_log_dict(data)

    assert masked["headers"]["X-Api-Token"] == "[REDACTED]"
    assert masked["headers"]["Accept"] == "json"
    assert masked["q"] == "raft"
    assert data["headers"]["X-Api-Token"] == "abc"


def test_summarize_payload() -> None:
    body = {"total_count": 300, "incomplete_results": False, "items": [{"id": i} for i in range(25)]}

    assert summarize_payload(body) == {
        "total_count": 300,
        "items": 25,
        "incomplete_results": False,
    }
    assert summarize_payload(["x"]) == {"type": "list"}


def test_response_log_summarizes_body() -> None:
    logger = get_logger("http")
    logger.setLevel(logging.DEBUG)
    stream, handler = capture("reposcope.http")
    try:
        log_http_response(
            200,
            "/search/repositories",
            body={"total_count": 2, "items": [{"id": 1, "name": "secret-name"}, {"id": 2}]},
            elapsed_ms=12.5,
        )
    finally:
        logging.getLogger("reposcope.http").removeHandler(handler)

    output = stream.getvalue()
    assert "Response 200" in output
    assert "elapsed=12.50ms" in output
    assert "'items': 2" in output
    assert "secret-name" not in output


def test_nothing_logged_above_debug() -> None:
    logger = get_logger("http")
    logger.setLevel(logging.INFO)
    stream, handler = capture("reposcope.http")
    try:
        log_http_request("GET", "/search/repositories")
    finally:
        logging.getLogger("reposcope.http").removeHandler(handler)

    assert stream.getvalue() == ""


def test_configure_logging_levels() -> None:
    handler = logging.StreamHandler(io.StringIO())

    configure_logging(level=logging.WARNING, http_level=logging.DEBUG, handler=handler)
    try:
        assert get_logger().level == logging.WARNING
        assert get_logger("http").level == logging.DEBUG
        assert get_logger("cache").level == logging.WARNING
    finally:
        get_logger().removeHandler(handler)


def test_get_logger_names() -> None:
    assert get_logger().name == "reposcope"
    assert get_logger("cache").name == "reposcope.cache"
