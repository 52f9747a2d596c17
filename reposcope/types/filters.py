"""Filter models for the search and trending controllers."""

from dataclasses import dataclass
from enum import Enum


class SortKey(str, Enum):
    """Sort orders accepted by the repository search endpoint."""

    STARS = "stars"
    FORKS = "forks"
    UPDATED = "updated"
    HELP_WANTED_ISSUES = "help-wanted-issues"


class TimeRange(str, Enum):
    """Trending windows."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class SearchFilters:
    """Filters of the ad-hoc search mode."""

    free_text: str = ""
    language: str = ""
    sort: SortKey = SortKey.STARS
    page: int = 1


@dataclass(frozen=True)
class TrendingFilters:
    """Filters of the trending mode."""

    range: TimeRange = TimeRange.DAILY
    language: str = ""
    page: int = 1
