"""reposcope testing utilities.

Provides a mock search backend and fixtures for testing code built on the
reposcope controllers and cache.
"""

from reposcope.testing.fixtures import (
    create_mock_payload_item,
    create_mock_repository,
    create_mock_result_page,
)
from reposcope.testing.mock import MockCall, MockResponse, MockSearchBackend

__all__ = [
    # Mock backend
    "MockSearchBackend",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_payload_item",
    "create_mock_repository",
    "create_mock_result_page",
]
