"""
Pytest plugin for reposcope testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["reposcope.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from reposcope.testing.fixtures import (
    fixed_now,
    full_result_page,
    mock_backend,
    mock_cache,
    sample_repository,
    short_result_page,
)

__all__ = [
    "mock_backend",
    "mock_cache",
    "sample_repository",
    "full_result_page",
    "short_result_page",
    "fixed_now",
]
