"""reposcope type definitions.

This module exports all data model types used by the package.
"""

from reposcope.types.filters import SearchFilters, SortKey, TimeRange, TrendingFilters
from reposcope.types.repos import Repository
from reposcope.types.results import ResultPage

__all__ = [
    # Filter types
    "SortKey",
    "TimeRange",
    "SearchFilters",
    "TrendingFilters",
    # Result types
    "Repository",
    "ResultPage",
]
