"""
Unit tests for SeriesMutator.
"""

import asyncio
import copy
from datetime import date, datetime

import pytest

from factories import FailingKeyValueStore, SlowKeyValueStore, make_event
from sidecal.core.constants import RECURRING_EVENTS_KEY
from sidecal.core.exceptions import InfrastructureError, ValidationError
from sidecal.models.recurring_event import (
    DailyRecurrence,
    RecurringEventCreate,
    WeekdaysRecurrence,
    WeeklyRecurrence,
)
from sidecal.services.recurrence_store import RecurrenceStore
from sidecal.services.series_mutator import SeriesMutator


async def _stored(memory_store) -> list:
    return await memory_store.get(RECURRING_EVENTS_KEY)


# ===========================================
# add_exception
# ===========================================


@pytest.mark.asyncio
async def test_add_exception(memory_store, seed, mutator):
    await seed(make_event("ev1"))

    changed = await mutator.add_exception("ev1", "2025-02-01")

    assert changed is True
    [document] = await _stored(memory_store)
    assert document["recurrence"]["exceptions"] == ["2025-02-01"]


@pytest.mark.asyncio
async def test_add_exception_is_idempotent(memory_store, seed, mutator):
    await seed(make_event("ev1", exceptions=["2025-01-15"]))

    await mutator.add_exception("ev1", "2025-02-01")
    once = copy.deepcopy(await _stored(memory_store))
    changed = await mutator.add_exception("ev1", "2025-02-01")

    assert changed is False
    assert await _stored(memory_store) == once
    assert once[0]["recurrence"]["exceptions"] == ["2025-01-15", "2025-02-01"]


@pytest.mark.asyncio
async def test_add_exception_accepts_date_and_datetime(memory_store, seed, mutator):
    await seed(make_event("ev1"))

    await mutator.add_exception("ev1", date(2025, 3, 1))
    await mutator.add_exception("ev1", datetime(2025, 3, 2, 14, 0))

    [document] = await _stored(memory_store)
    assert document["recurrence"]["exceptions"] == ["2025-03-01", "2025-03-02"]


@pytest.mark.asyncio
async def test_add_exception_unknown_id_is_noop(memory_store, seed, mutator):
    await seed(make_event("ev1"))
    before = await _stored(memory_store)

    changed = await mutator.add_exception("missing", "2025-02-01")

    assert changed is False
    assert await _stored(memory_store) == before


@pytest.mark.asyncio
async def test_add_exception_on_empty_storage_writes_nothing(memory_store, mutator):
    assert await mutator.add_exception("ev1", "2025-02-01") is False
    assert await memory_store.get(RECURRING_EVENTS_KEY, "absent") == "absent"


@pytest.mark.asyncio
async def test_add_exception_to_non_recurring_record_is_noop(memory_store, seed, mutator):
    await seed(make_event("plain", None))

    assert await mutator.add_exception("plain", "2025-02-01") is False
    [document] = await _stored(memory_store)
    assert document["recurrence"] is None


@pytest.mark.asyncio
async def test_add_exception_rejects_invalid_date(seed, mutator):
    await seed(make_event("ev1"))

    with pytest.raises(ValidationError):
        await mutator.add_exception("ev1", "2025-02-30")


@pytest.mark.asyncio
async def test_add_exception_keeps_malformed_neighbours(memory_store, seed, mutator):
    corrupt = make_event("corrupt", "yearly")
    await seed(corrupt, make_event("ev1"))

    await mutator.add_exception("ev1", "2025-02-01")

    stored = await _stored(memory_store)
    assert stored[0] == corrupt
    assert stored[1]["recurrence"]["exceptions"] == ["2025-02-01"]


@pytest.mark.asyncio
async def test_exception_hides_occurrence(seed, mutator, resolver):
    await seed(make_event("ev1"))

    await mutator.add_exception("ev1", "2025-01-03")

    assert await resolver.occurrences_on(date(2025, 1, 3)) == []
    assert len(await resolver.occurrences_on(date(2025, 1, 4))) == 1


# ===========================================
# delete_series
# ===========================================


@pytest.mark.asyncio
async def test_delete_series(memory_store, seed, mutator):
    await seed(make_event("a"), make_event("ev1"), make_event("b"))

    deleted = await mutator.delete_series("ev1")

    assert deleted is True
    assert [doc["id"] for doc in await _stored(memory_store)] == ["a", "b"]


@pytest.mark.asyncio
async def test_delete_unknown_series_leaves_collection_unchanged(memory_store, seed, mutator):
    await seed(make_event("a"), make_event("b"))
    before = await _stored(memory_store)

    deleted = await mutator.delete_series("missing")

    assert deleted is False
    assert await _stored(memory_store) == before


@pytest.mark.asyncio
async def test_exception_then_delete_removes_series(seed, mutator, resolver):
    await seed(make_event("ev1"), make_event("ev2"))

    await mutator.add_exception("ev1", "2025-02-01")
    await mutator.delete_series("ev1")

    for target in (date(2025, 1, 5), date(2025, 2, 1), date(2025, 2, 2)):
        instances = await resolver.occurrences_on(target)
        assert [i.original_id for i in instances] == ["ev2"]


@pytest.mark.asyncio
async def test_storage_failure_propagates():
    mutator = SeriesMutator(RecurrenceStore(FailingKeyValueStore()))

    with pytest.raises(InfrastructureError):
        await mutator.delete_series("ev1")
    with pytest.raises(InfrastructureError):
        await mutator.add_exception("ev1", "2025-01-01")


@pytest.mark.asyncio
async def test_concurrent_mutations_do_not_lose_updates():
    """Back-to-back unawaited mutations through one mutator are serialized."""
    store = SlowKeyValueStore(
        {RECURRING_EVENTS_KEY: [make_event("a"), make_event("b"), make_event("c")]}
    )
    mutator = SeriesMutator(RecurrenceStore(store))

    await asyncio.gather(
        mutator.add_exception("a", "2025-01-02"),
        mutator.add_exception("b", "2025-01-03"),
        mutator.delete_series("c"),
    )

    stored = await store.get(RECURRING_EVENTS_KEY)
    assert [doc["id"] for doc in stored] == ["a", "b"]
    assert stored[0]["recurrence"]["exceptions"] == ["2025-01-02"]
    assert stored[1]["recurrence"]["exceptions"] == ["2025-01-03"]


# ===========================================
# save_series / get_series / list_series
# ===========================================


@pytest.mark.asyncio
async def test_save_series_assigns_id(memory_store, mutator):
    record = await mutator.save_series(
        RecurringEventCreate(
            title="Standup",
            start_time="09:00",
            end_time="09:15",
            recurrence=WeekdaysRecurrence(start_date=date(2025, 1, 1)),
        )
    )

    assert record.id
    [document] = await _stored(memory_store)
    assert document["id"] == record.id
    assert document["title"] == "Standup"
    assert document["startTime"] == "09:00"
    assert document["recurrence"]["type"] == "weekdays"
    assert document["recurrence"]["startDate"] == "2025-01-01"
    assert document["recurrence"]["exceptions"] == []


@pytest.mark.asyncio
async def test_save_weekly_without_days_uses_start_weekday(mutator):
    record = await mutator.save_series(
        RecurringEventCreate(
            title="Review",
            recurrence=WeeklyRecurrence(start_date=date(2025, 1, 8)),
        )
    )

    assert record.recurrence.days_of_week == [3]


@pytest.mark.asyncio
async def test_save_weekly_deduplicates_days(mutator):
    record = await mutator.save_series(
        RecurringEventCreate(
            title="Gym",
            recurrence=WeeklyRecurrence(start_date=date(2025, 1, 6), days_of_week=[5, 1, 5]),
        )
    )

    assert record.recurrence.days_of_week == [5, 1]


@pytest.mark.asyncio
async def test_save_series_replaces_in_place_and_keeps_exceptions(memory_store, seed, mutator):
    await seed(
        make_event("a"),
        make_event("ev1", exceptions=["2025-01-03"]),
        make_event("b"),
    )

    record = await mutator.save_series(
        RecurringEventCreate(
            id="ev1",
            title="Renamed",
            recurrence=DailyRecurrence(start_date=date(2025, 1, 1), interval=2),
        )
    )

    assert record.recurrence.exceptions == {date(2025, 1, 3)}
    stored = await _stored(memory_store)
    assert [doc["id"] for doc in stored] == ["a", "ev1", "b"]
    assert stored[1]["title"] == "Renamed"
    assert stored[1]["recurrence"]["interval"] == 2
    assert stored[1]["recurrence"]["exceptions"] == ["2025-01-03"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "rule",
    [
        DailyRecurrence(start_date=None),
        DailyRecurrence(start_date=date(2025, 1, 10), end_date=date(2025, 1, 5)),
        DailyRecurrence(start_date=date(2025, 1, 1), interval=0),
        WeeklyRecurrence(start_date=date(2025, 1, 1), days_of_week=[7]),
    ],
)
async def test_save_series_rejects_invalid_rules(memory_store, mutator, rule):
    with pytest.raises(ValidationError):
        await mutator.save_series(RecurringEventCreate(title="Bad", recurrence=rule))

    assert await memory_store.get(RECURRING_EVENTS_KEY) is None


@pytest.mark.asyncio
async def test_get_and_list_series(seed, mutator):
    await seed(make_event("a"), make_event("corrupt", "yearly"), make_event("b"))

    assert [record.id for record in await mutator.list_series()] == ["a", "b"]
    assert (await mutator.get_series("b")).title == "Event b"
    assert await mutator.get_series("corrupt") is None
    assert await mutator.get_series("missing") is None
