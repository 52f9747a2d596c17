"""
Pytest fixtures for reposcope testing.

Provides factories for repositories and result pages, and fixtures wiring a
MockSearchBackend into a FetchCache.
"""

from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any

import pytest

from reposcope.cache import FetchCache
from reposcope.query import PAGE_SIZE
from reposcope.testing.mock import MockSearchBackend
from reposcope.types.repos import Repository
from reposcope.types.results import ResultPage


# ============================================================================
# Factories
# ============================================================================


def create_mock_payload_item(repo_id: int = 1, **overrides: Any) -> dict[str, Any]:
    """Build one raw search item as the endpoint returns it."""
    name = overrides.pop("name", f"repo-{repo_id}")
    owner = overrides.pop("owner_login", "octocat")
    item: dict[str, Any] = {
        "id": repo_id,
        "name": name,
        "full_name": f"{owner}/{name}",
        "owner": {
            "login": owner,
            "avatar_url": f"https://avatars.githubusercontent.com/u/{repo_id}",
        },
        "html_url": f"https://github.com/{owner}/{name}",
        "description": f"Repository number {repo_id}",
        "language": "Go",
        "stargazers_count": 1000 - repo_id,
        "forks_count": 10,
        "open_issues_count": 2,
        "topics": ["distributed-systems"],
        "created_at": "2024-05-01T12:00:00Z",
        "updated_at": "2024-05-02T08:30:00Z",
    }
    item.update(overrides)
    return item


def create_mock_repository(repo_id: int = 1, **overrides: Any) -> Repository:
    """Create a Repository with sensible defaults."""
    return Repository.from_api(create_mock_payload_item(repo_id, **overrides))


def create_mock_result_page(
    count: int = PAGE_SIZE,
    start_id: int = 1,
    total_count: int | None = None,
) -> ResultPage:
    """Create a ResultPage of ``count`` repositories with ids from ``start_id``."""
    return ResultPage(
        items=tuple(create_mock_repository(start_id + i) for i in range(count)),
        total_count=count if total_count is None else total_count,
        fetched_at=datetime(2024, 5, 15, 10, 30, 0, tzinfo=timezone.utc),
    )


# ============================================================================
# Backend Fixtures
# ============================================================================


@pytest.fixture
def mock_backend() -> Generator[MockSearchBackend, None, None]:
    """
    Provide a MockSearchBackend for testing.

    Example:
        ```python
        def test_my_feature(mock_backend):
            mock_backend.configure_default(response=create_mock_result_page(3))
            ...
            assert mock_backend.call_count() == 1
        ```
    """
    backend = MockSearchBackend()
    yield backend
    backend.reset()


@pytest.fixture
def mock_cache(mock_backend: MockSearchBackend) -> FetchCache:
    """Provide a FetchCache over ``mock_backend`` with dedupe disabled."""
    return FetchCache(mock_backend, dedupe_interval=0)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_repository() -> Repository:
    """Provide a sample Repository object."""
    return create_mock_repository(42, name="raft", owner_login="hashicorp")


@pytest.fixture
def full_result_page() -> ResultPage:
    """Provide a page holding exactly one page size of repositories."""
    return create_mock_result_page(PAGE_SIZE, total_count=1000)


@pytest.fixture
def short_result_page() -> ResultPage:
    """Provide a page shorter than the page size."""
    return create_mock_result_page(7, start_id=26, total_count=1000)


@pytest.fixture
def fixed_now() -> datetime:
    """Provide a fixed reference time for trending windows."""
    return datetime(2024, 5, 15, 10, 30, 0, tzinfo=timezone.utc)
