"""
Enum definitions for the application.
"""

from enum import Enum


class RecurrenceType(str, Enum):
    """Supported recurrence patterns for recurring events."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    WEEKDAYS = "weekdays"  # Monday through Friday
