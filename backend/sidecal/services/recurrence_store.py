"""
Recurrence store adapter.

Loads and saves the whole collection of recurring-event records through a
key/value store. The collection is one ordered JSON list under a single key.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sidecal.core.constants import RECURRING_EVENTS_KEY, local_events_key
from sidecal.core.logger import setup_logger
from sidecal.interfaces.key_value_store import IKeyValueStore
from sidecal.models.recurring_event import RecurringEventRecord
from sidecal.utils.datetime_utils import DateLike, format_date_string

logger = setup_logger(__name__)


class RecurrenceStore:
    """Read/write access to the stored recurring-event collection."""

    def __init__(self, store: IKeyValueStore, key: str = RECURRING_EVENTS_KEY):
        self.store = store
        self.key = key

    async def load_documents(self) -> list[Any]:
        """Load the raw stored documents, in storage order."""
        value = await self.store.get(self.key, [])
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning(
                f"Ignoring non-list value under {self.key!r}: {type(value).__name__}"
            )
            return []
        return value

    async def save_documents(self, documents: list[Any]) -> None:
        """Replace the stored collection."""
        await self.store.set({self.key: documents})

    async def load_records(self) -> list[RecurringEventRecord]:
        """Load and validate every record. Malformed documents are skipped."""
        records: list[RecurringEventRecord] = []
        for index, document in enumerate(await self.load_documents()):
            record = parse_record(document)
            if record is None:
                logger.warning(f"Skipping malformed recurring event at index {index}")
                continue
            records.append(record)
        return records

    async def load_local_events(self, day: DateLike) -> list[Any]:
        """Load the one-off events stored for a single day."""
        key = local_events_key(format_date_string(day))
        events = await self.store.get(key, [])
        return events if isinstance(events, list) else []


def parse_record(document: Any) -> RecurringEventRecord | None:
    """Validate one stored document, returning None if it is malformed."""
    if not isinstance(document, dict):
        return None
    try:
        return RecurringEventRecord.model_validate(document)
    except PydanticValidationError as e:
        logger.debug(f"Record validation failed: {e}")
        return None
