"""
Property-based tests for query building.

Feature: query builder
"""

from datetime import datetime, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from reposcope.exceptions import ValidationError
from reposcope.query import (
    PAGE_SIZE,
    SearchRequest,
    build_search_request,
    build_trending_request,
    compose_query,
)
from reposcope.types.filters import SortKey

# Test strategies
word_strategy = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("L", "N"), whitelist_characters="-_"),
)
language_strategy = st.sampled_from(["", "go", "rust", "python", "c++"])
sort_strategy = st.sampled_from([key.value for key in SortKey])
page_strategy = st.integers(min_value=1, max_value=40)


def test_search_request_canonical_form() -> None:
    request = build_search_request("raft", "go", "stars", 2)

    assert request is not None
    assert request.key == "q=raft language:go&sort=stars&order=desc&per_page=25&page=2"
    assert request.to_params() == {
        "q": "raft language:go",
        "sort": "stars",
        "order": "desc",
        "per_page": 25,
        "page": 2,
    }


def test_trending_request_weekly_rust() -> None:
    now = datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc)

    request = build_trending_request("weekly", "rust", 1, now=now)

    assert request.q == "created:>2024-05-08 language:rust"
    assert request.sort == "stars"
    assert request.order == "desc"
    assert request.per_page == 25
    assert request.page == 1


def test_trending_request_without_language() -> None:
    now = datetime(2024, 5, 15, tzinfo=timezone.utc)

    request = build_trending_request("daily", "", 3, now=now)

    assert request.key == "q=created:>2024-05-14&sort=stars&order=desc&per_page=25&page=3"


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_blank_search_is_inactive(text: str) -> None:
    assert build_search_request(text, "go") is None


def test_search_text_is_trimmed() -> None:
    request = build_search_request("  raft  ", "")

    assert request is not None
    assert request.q == "raft"


def test_unknown_sort_is_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        build_search_request("raft", sort="popularity")

    assert exc_info.value.code == "INVALID_SORT"


@pytest.mark.parametrize("page", [0, -1])
def test_page_below_one_is_rejected(page: int) -> None:
    with pytest.raises(ValidationError) as exc_info:
        build_search_request("raft", page=page)

    assert exc_info.value.code == "INVALID_PAGE"


def test_compose_query_qualifier_order() -> None:
    assert compose_query("raft", "go", "2024-05-01") == "raft language:go created:>2024-05-01"
    assert compose_query("", "go") == "language:go"
    assert compose_query("raft") == "raft"


@given(
    text=word_strategy,
    language=language_strategy,
    sort=sort_strategy,
    page=page_strategy,
)
@settings(max_examples=100)
def test_search_request_shape(text: str, language: str, sort: str, page: int) -> None:
    """
    For any non-blank query, the request carries the free text first, the
    language qualifier only when a language is set, order=desc and 25 per page.
    """
    request = build_search_request(text, language, sort, page)

    assert request is not None
    assert request.q.startswith(text)
    assert ("language:" in request.q) == bool(language)
    if language:
        assert request.q == f"{text} language:{language}"
    assert request.sort == sort
    assert request.order == "desc"
    assert request.per_page == PAGE_SIZE
    assert request.page == page


@given(
    text=word_strategy,
    language=language_strategy,
    sort=sort_strategy,
    page=page_strategy,
)
@settings(max_examples=100)
def test_equal_filters_build_equal_keys(text: str, language: str, sort: str, page: int) -> None:
    """Building twice from the same filters yields the same request key."""
    first = build_search_request(text, language, sort, page)
    second = build_search_request(text, language, SortKey(sort), page)

    assert first == second
    assert first is not None and second is not None
    assert first.key == second.key


def test_different_pages_have_different_keys() -> None:
    assert SearchRequest("raft", "stars", 1).key != SearchRequest("raft", "stars", 2).key
