"""
Recurring event API endpoints.
"""

from datetime import date
from typing import Any

from fastapi import APIRouter, Query, status

from sidecal.api.deps import Mutator, Resolver
from sidecal.core.exceptions import NotFoundError
from sidecal.models.recurring_event import (
    ExceptionCreate,
    RecurringEventCreate,
    RecurringEventInstance,
    RecurringEventRecord,
)

router = APIRouter()


@router.get("", response_model=list[RecurringEventRecord], response_model_by_alias=True)
async def list_recurring_events(mutator: Mutator) -> list[RecurringEventRecord]:
    """List recurring event definitions."""
    return await mutator.list_series()


@router.get(
    "/occurrences",
    response_model=list[RecurringEventInstance],
    response_model_by_alias=True,
)
async def get_occurrences(
    resolver: Resolver,
    target_date: date = Query(..., alias="date", description="YYYY-MM-DD"),
) -> list[RecurringEventInstance]:
    """Get the recurring event instances occurring on a date."""
    return await resolver.occurrences_on(target_date)


@router.get("/day")
async def get_day_events(
    resolver: Resolver,
    target_date: date = Query(..., alias="date", description="YYYY-MM-DD"),
) -> list[dict[str, Any]]:
    """Get recurring instances followed by one-off events for a date."""
    return await resolver.events_for_date(target_date)


@router.post(
    "",
    response_model=RecurringEventRecord,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def save_recurring_event(
    payload: RecurringEventCreate,
    mutator: Mutator,
) -> RecurringEventRecord:
    """Create a recurring event, or replace the one with the same id."""
    return await mutator.save_series(payload)


@router.get(
    "/{event_id}",
    response_model=RecurringEventRecord,
    response_model_by_alias=True,
)
async def get_recurring_event(event_id: str, mutator: Mutator) -> RecurringEventRecord:
    """Get a recurring event definition by ID."""
    result = await mutator.get_series(event_id)
    if not result:
        raise NotFoundError(f"RecurringEvent {event_id} not found")
    return result


@router.post("/{event_id}/exceptions", status_code=status.HTTP_204_NO_CONTENT)
async def add_recurring_event_exception(
    event_id: str,
    payload: ExceptionCreate,
    mutator: Mutator,
) -> None:
    """Skip one occurrence of a recurring event. Unknown IDs are ignored."""
    await mutator.add_exception(event_id, payload.day)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recurring_event(event_id: str, mutator: Mutator) -> None:
    """Delete a recurring event series. Unknown IDs are ignored."""
    await mutator.delete_series(event_id)
