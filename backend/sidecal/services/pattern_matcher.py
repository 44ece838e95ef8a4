"""
Recurrence pattern matching.

Decides whether a single calendar date is an occurrence of a recurrence
pattern. Pure functions: no I/O, no state. Malformed input (missing start
date, non-positive interval, unknown type, unparseable dates) never raises;
it simply does not match.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, Optional

from sidecal.models.enums import RecurrenceType
from sidecal.models.recurring_event import RecurrenceRuleBase
from sidecal.utils.datetime_utils import DateLike, js_weekday, to_local_date, week_start


def matches(
    rule_type: RecurrenceType | str,
    rule_start_date: Optional[DateLike],
    target_date: DateLike,
    interval: int = 1,
    days_of_week: Optional[Iterable[int]] = None,
) -> bool:
    """Check whether ``target_date`` is an occurrence of the pattern.

    Args:
        rule_type: recurrence type ("daily", "weekly", ...)
        rule_start_date: first possible occurrence; anchor for interval steps
        target_date: candidate date (time-of-day is ignored)
        interval: step in the type's natural unit (days/weeks/months)
        days_of_week: WEEKLY only, 0=Sunday ... 6=Saturday

    Returns:
        True if the pattern produces an occurrence on ``target_date``.
    """
    try:
        rule_type = RecurrenceType(rule_type)
    except ValueError:
        return False

    if rule_type == RecurrenceType.NONE or rule_start_date is None:
        return False

    try:
        start = to_local_date(rule_start_date)
        target = to_local_date(target_date)
    except (TypeError, ValueError):
        return False

    if rule_type == RecurrenceType.WEEKDAYS:
        return 1 <= js_weekday(target) <= 5

    # Remaining types step by interval
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        return False

    if rule_type == RecurrenceType.DAILY:
        days_diff = (target - start).days
        return days_diff >= 0 and days_diff % interval == 0

    elif rule_type == RecurrenceType.WEEKLY:
        return _matches_weekly(start, target, interval, list(days_of_week or []))

    elif rule_type == RecurrenceType.MONTHLY:
        return _matches_monthly(start, target, interval)

    return False


def rule_occurs_on(rule: RecurrenceRuleBase, target_date: DateLike) -> bool:
    """Evaluate a typed recurrence rule against a date.

    Only the pattern is checked here; range and exceptions are the caller's
    concern.
    """
    return matches(
        rule.type,
        rule.start_date,
        target_date,
        getattr(rule, "interval", 1),
        getattr(rule, "days_of_week", None),
    )


def _matches_weekly(
    start: date, target: date, interval: int, days_of_week: list[int]
) -> bool:
    """Weekday filter, then whole-week interval measured from the start week."""
    target_weekday = js_weekday(target)
    if days_of_week:
        if target_weekday not in days_of_week:
            return False
    elif target_weekday != js_weekday(start):
        return False

    # Both sides aligned to their Sunday so the step counts whole weeks
    weeks_diff = round((week_start(target) - week_start(start)).days / 7)
    return weeks_diff >= 0 and weeks_diff % interval == 0


def _matches_monthly(start: date, target: date, interval: int) -> bool:
    """Same day-of-month as the start, clamped to the target month's length."""
    last_day = calendar.monthrange(target.year, target.month)[1]
    if target.day != min(start.day, last_day):
        return False

    months_diff = (target.year - start.year) * 12 + (target.month - start.month)
    return months_diff >= 0 and months_diff % interval == 0
