"""
Recurring event models.

Defines the persisted recurring-event records, their recurrence rules and
the transient per-date instances materialized from them. Stored documents
use camelCase keys; Python code uses snake_case attributes.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from sidecal.utils.datetime_utils import parse_date_set


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecurrenceRuleBase(CamelModel):
    """Fields shared by every recurrence rule variant."""

    start_date: Optional[date] = Field(
        None, description="First possible occurrence; anchor for interval math"
    )
    end_date: Optional[date] = Field(
        None, description="Last possible occurrence (inclusive); None = unbounded"
    )
    exceptions: set[date] = Field(
        default_factory=set, description="Dates on which the series is skipped"
    )

    @field_validator("exceptions", mode="before")
    @classmethod
    def _parse_exceptions(cls, value: Any) -> set[date]:
        # Entries that are not dates are dropped
        return parse_date_set(value)

    @field_serializer("exceptions")
    def _serialize_exceptions(self, value: set[date]) -> list[str]:
        return sorted(day.isoformat() for day in value)

    def in_range(self, day: date) -> bool:
        """Check the start/end window. An inverted window contains nothing."""
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False
        return True


class NoRecurrence(RecurrenceRuleBase):
    """Explicit "does not repeat" rule. Never produces occurrences."""

    type: Literal["none"] = "none"


class DailyRecurrence(RecurrenceRuleBase):
    """Every ``interval`` days from the start date."""

    type: Literal["daily"] = "daily"
    interval: int = 1


class WeeklyRecurrence(RecurrenceRuleBase):
    """Selected weekdays of every ``interval``-th week from the start week."""

    type: Literal["weekly"] = "weekly"
    interval: int = 1
    days_of_week: list[int] = Field(
        default_factory=list,
        description="0=Sunday ... 6=Saturday; empty = weekday of start date",
    )


class MonthlyRecurrence(RecurrenceRuleBase):
    """Start date's day-of-month, clamped to short months."""

    type: Literal["monthly"] = "monthly"
    interval: int = 1


class WeekdaysRecurrence(RecurrenceRuleBase):
    """Monday through Friday."""

    type: Literal["weekdays"] = "weekdays"


RecurrenceRule = Annotated[
    Union[
        NoRecurrence,
        DailyRecurrence,
        WeeklyRecurrence,
        MonthlyRecurrence,
        WeekdaysRecurrence,
    ],
    Field(discriminator="type"),
]


class RecurringEventBase(CamelModel):
    """Display fields of a recurring event. Unknown fields are carried through."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    # Display fields are carried through as stored
    title: Any = ""
    start_time: Any = Field(None, description="HH:MM")
    end_time: Any = Field(None, description="HH:MM")
    reminder: Any = False
    recurrence: Optional[RecurrenceRule] = None


class RecurringEventCreate(RecurringEventBase):
    """Create or replace a recurring event. ``id`` is assigned when absent."""

    title: str = ""
    start_time: Optional[str] = Field(None, description="HH:MM")
    end_time: Optional[str] = Field(None, description="HH:MM")
    reminder: bool = False
    id: Optional[str] = None


class RecurringEventRecord(RecurringEventBase):
    """Persisted recurring event definition."""

    id: str


class RecurringEventInstance(RecurringEventRecord):
    """One occurrence of a recurring event on a specific date. Never persisted."""

    is_recurring_instance: bool = True
    instance_date: date
    original_id: str


class ExceptionCreate(BaseModel):
    """Request body for skipping a single occurrence."""

    model_config = ConfigDict(populate_by_name=True)

    day: date = Field(..., alias="date", description="Occurrence to skip")
