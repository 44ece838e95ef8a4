"""
Series mutator.

Skips single occurrences, deletes whole series and saves series
definitions. Every mutation is a read-modify-write of the whole stored
collection.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Optional
from uuid import uuid4

from sidecal.core.exceptions import ValidationError
from sidecal.core.logger import setup_logger
from sidecal.models.enums import RecurrenceType
from sidecal.models.recurring_event import (
    RecurrenceRuleBase,
    RecurringEventCreate,
    RecurringEventRecord,
)
from sidecal.services.recurrence_store import RecurrenceStore
from sidecal.utils.datetime_utils import DateLike, format_date_string, js_weekday, parse_date_set

logger = setup_logger(__name__)


class SeriesMutator:
    """Service for mutating recurring-event series.

    Mutations issued through one instance are serialized, so back-to-back
    calls on the same mutator do not lose each other's writes. Writers
    outside this instance are not coordinated with.
    """

    def __init__(self, store: RecurrenceStore):
        self.store = store
        self._lock = asyncio.Lock()

    async def add_exception(self, record_id: str, exception_date: DateLike) -> bool:
        """Skip one occurrence of a series.

        Unknown ids are ignored. Adding a date that is already an exception
        changes nothing.

        Returns:
            True if the stored collection was changed.
        """
        date_str = _date_string(exception_date)

        async with self._lock:
            documents = await self.store.load_documents()
            document = _find_document(documents, record_id)
            if document is None:
                logger.debug(f"add_exception: recurring event {record_id} not found")
                return False

            recurrence = document.get("recurrence")
            if not isinstance(recurrence, dict):
                logger.debug(f"add_exception: {record_id} has no recurrence")
                return False

            exceptions = recurrence.get("exceptions")
            if not isinstance(exceptions, list):
                exceptions = []
                recurrence["exceptions"] = exceptions
            if date_str in exceptions:
                return False

            exceptions.append(date_str)
            await self.store.save_documents(documents)

        logger.info(f"Added exception {date_str} to recurring event {record_id}")
        return True

    async def delete_series(self, record_id: str) -> bool:
        """Delete a series entirely. Unknown ids are ignored.

        Returns:
            True if a record was removed.
        """
        async with self._lock:
            documents = await self.store.load_documents()
            remaining = [doc for doc in documents if _document_id(doc) != record_id]
            if len(remaining) == len(documents):
                logger.debug(f"delete_series: recurring event {record_id} not found")
                return False
            await self.store.save_documents(remaining)

        logger.info(f"Deleted recurring event {record_id}")
        return True

    async def save_series(self, data: RecurringEventCreate) -> RecurringEventRecord:
        """Create a series, or replace the one with the same id.

        When an existing series is replaced and the new rule carries no
        exceptions, the stored exceptions are kept.

        Raises:
            ValidationError: If the recurrence rule is inconsistent
        """
        rule = _normalize_rule(data.recurrence)
        record_id = data.id or str(uuid4())

        async with self._lock:
            documents = await self.store.load_documents()
            existing = _find_document(documents, record_id)

            if rule is not None and not rule.exceptions and existing is not None:
                kept = _stored_exceptions(existing)
                if kept:
                    rule = rule.model_copy(update={"exceptions": kept})

            payload = data.model_dump(by_alias=True, exclude={"id", "recurrence"})
            payload["id"] = record_id
            payload["recurrence"] = rule.model_dump(by_alias=True) if rule else None
            record = RecurringEventRecord.model_validate(payload)
            document = record.model_dump(mode="json", by_alias=True)

            if existing is None:
                documents.append(document)
            else:
                documents[documents.index(existing)] = document
            await self.store.save_documents(documents)

        logger.info(
            f"{'Updated' if existing is not None else 'Created'} recurring event {record_id}"
        )
        return record

    async def get_series(self, record_id: str) -> Optional[RecurringEventRecord]:
        """Get a series by id."""
        for record in await self.store.load_records():
            if record.id == record_id:
                return record
        return None

    async def list_series(self) -> list[RecurringEventRecord]:
        """List every well-formed series in storage order."""
        return await self.store.load_records()


def _date_string(value: DateLike) -> str:
    try:
        return format_date_string(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def _document_id(document: Any) -> Any:
    return document.get("id") if isinstance(document, dict) else None


def _find_document(documents: list[Any], record_id: str) -> Optional[dict]:
    for document in documents:
        if _document_id(document) == record_id:
            return document
    return None


def _stored_exceptions(document: dict) -> set[date]:
    """Exceptions of a stored document; unparseable entries are dropped."""
    recurrence = document.get("recurrence")
    if not isinstance(recurrence, dict):
        return set()
    return parse_date_set(recurrence.get("exceptions"))


def _normalize_rule(rule: Optional[RecurrenceRuleBase]) -> Optional[RecurrenceRuleBase]:
    """Validate a rule coming from the editor and fill in defaults."""
    if rule is None or rule.type == RecurrenceType.NONE:
        return rule

    if rule.start_date is None:
        raise ValidationError(f"{rule.type} recurrence requires a start date")
    if rule.end_date is not None and rule.end_date < rule.start_date:
        raise ValidationError("End date must be on or after start date")

    interval = getattr(rule, "interval", 1)
    if interval < 1:
        raise ValidationError(f"Interval must be at least 1, got {interval}")

    if rule.type == RecurrenceType.WEEKLY:
        days: list[int] = []
        for day in rule.days_of_week:
            if not 0 <= day <= 6:
                raise ValidationError(f"Day of week must be 0-6, got {day}")
            if day not in days:
                days.append(day)
        # No selection means the start date's weekday
        rule = rule.model_copy(update={"days_of_week": days or [js_weekday(rule.start_date)]})

    return rule
