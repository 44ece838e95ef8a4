"""Pydantic models (schemas) for the application."""

from sidecal.models.enums import RecurrenceType
from sidecal.models.recurring_event import (
    DailyRecurrence,
    ExceptionCreate,
    MonthlyRecurrence,
    NoRecurrence,
    RecurrenceRule,
    RecurringEventCreate,
    RecurringEventInstance,
    RecurringEventRecord,
    WeekdaysRecurrence,
    WeeklyRecurrence,
)

__all__ = [
    # Enums
    "RecurrenceType",
    # Rules
    "RecurrenceRule",
    "NoRecurrence",
    "DailyRecurrence",
    "WeeklyRecurrence",
    "MonthlyRecurrence",
    "WeekdaysRecurrence",
    # Events
    "RecurringEventCreate",
    "RecurringEventRecord",
    "RecurringEventInstance",
    "ExceptionCreate",
]
