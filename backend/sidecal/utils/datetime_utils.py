"""
Calendar-date normalization utilities.

The recurrence engine works at day granularity in host local time. Callers
hand in date-only strings, naive datetimes and zone-aware datetimes; these
helpers reduce all of them to a ``date`` before any arithmetic happens.
"""

from datetime import date, datetime, timedelta
from typing import Any, Union

DateLike = Union[date, datetime, str]


def to_local_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a local calendar date (midnight).

    Handles:
    - ``date`` objects: returned unchanged
    - naive ``datetime``: time-of-day dropped
    - aware ``datetime``: converted to host local time, then time-of-day dropped
    - strings: "2025-01-03", "2025-01-03T09:30:00", "2025-01-03T09:30:00Z"

    Args:
        value: date-like value

    Returns:
        date: the calendar date in host local time

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return to_local_date(datetime.fromisoformat(text.replace("Z", "+00:00")))

    raise ValueError(f"Unsupported date value: {value!r}")


def format_date_string(value: DateLike) -> str:
    """Format a date-like value as ``YYYY-MM-DD`` in local time."""
    return to_local_date(value).isoformat()


def js_weekday(value: date) -> int:
    """Weekday number with 0=Sunday ... 6=Saturday."""
    return value.isoweekday() % 7


def week_start(value: date) -> date:
    """Sunday that starts the week containing ``value``."""
    return value - timedelta(days=js_weekday(value))


def parse_date_set(values: Any) -> set[date]:
    """Parse a collection of date-like values, dropping entries that are not dates.

    Anything other than a list, tuple or set yields an empty set.
    """
    if not isinstance(values, (list, tuple, set, frozenset)):
        return set()
    parsed: set[date] = set()
    for value in values:
        try:
            parsed.add(to_local_date(value))
        except (TypeError, ValueError):
            continue
    return parsed
