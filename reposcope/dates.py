"""Date windows for trending discovery.

A trending window is expressed to the search endpoint as a ``created:>DATE``
qualifier, where DATE is a calendar day in UTC.
"""

import calendar
from datetime import date, datetime, timedelta, timezone

from reposcope.types.filters import TimeRange


def subtract_months(day: date, months: int) -> date:
    """
    Move a date back by whole calendar months.

    The day of month is clamped to the length of the target month, so
    2025-03-31 minus one month is 2025-02-28 and 2024-03-31 is 2024-02-29.

    Args:
        day: Starting date
        months: Number of months to go back (may be negative to go forward)

    Returns:
        The shifted date
    """
    index = day.year * 12 + (day.month - 1) - months
    year, month_index = divmod(index, 12)
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def _utc_today(now: datetime | None) -> date:
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.date()


def coerce_time_range(time_range: TimeRange | str) -> TimeRange:
    """Read a selector as a TimeRange, falling back to daily."""
    try:
        return TimeRange(time_range)
    except ValueError:
        return TimeRange.DAILY


def resolve_date_window(
    time_range: TimeRange | str, now: datetime | None = None
) -> str:
    """
    Resolve a trending window to its lower-bound date.

    Args:
        time_range: "daily", "weekly" or "monthly"; anything else is read as daily
        now: Reference time (default: current UTC time; naive values are taken as UTC)

    Returns:
        The bound as ``YYYY-MM-DD``
    """
    today = _utc_today(now)
    selector = coerce_time_range(time_range)

    if selector is TimeRange.WEEKLY:
        bound = today - timedelta(days=7)
    elif selector is TimeRange.MONTHLY:
        bound = subtract_months(today, 1)
    else:
        bound = today - timedelta(days=1)

    return bound.isoformat()


def created_predicate(bound: str) -> str:
    """Search qualifier matching repositories created strictly after ``bound``."""
    return f"created:>{bound}"
