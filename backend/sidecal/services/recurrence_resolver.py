"""
Recurrence resolver.

Materializes the recurring-event instances visible on a given date.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from sidecal.core.logger import setup_logger
from sidecal.models.recurring_event import RecurringEventInstance, RecurringEventRecord
from sidecal.services.pattern_matcher import rule_occurs_on
from sidecal.services.recurrence_store import RecurrenceStore
from sidecal.utils.datetime_utils import DateLike, to_local_date

logger = setup_logger(__name__)


class RecurrenceResolver:
    """Service for resolving recurring events against a calendar date.

    Nothing is cached: each query re-reads storage and re-evaluates every
    record.
    """

    def __init__(self, store: RecurrenceStore):
        self.store = store

    async def occurrences_on(self, target_date: DateLike) -> list[RecurringEventInstance]:
        """Get the recurring-event instances that occur on ``target_date``.

        Instances come back in storage order. Records without a recurrence,
        outside their start/end window, or with the date in their exceptions
        produce nothing.
        """
        target = to_local_date(target_date)
        records = await self.store.load_records()
        instances: list[RecurringEventInstance] = []

        for record in records:
            rule = record.recurrence
            if rule is None:
                continue
            if not rule.in_range(target):
                continue
            if target in rule.exceptions:
                continue
            if rule_occurs_on(rule, target):
                instances.append(self._materialize(record, target))

        logger.debug(
            f"{len(instances)} of {len(records)} recurring events occur on {target}"
        )
        return instances

    async def events_for_date(self, target_date: DateLike) -> list[dict[str, Any]]:
        """Get every event shown on a day: recurring instances, then one-off events."""
        target = to_local_date(target_date)
        instances = await self.occurrences_on(target)
        one_off = await self.store.load_local_events(target)
        return [
            instance.model_dump(mode="json", by_alias=True) for instance in instances
        ] + one_off

    @staticmethod
    def _materialize(record: RecurringEventRecord, target: date) -> RecurringEventInstance:
        """Project a record onto one occurrence date."""
        data = record.model_dump(by_alias=True)
        data.update(
            isRecurringInstance=True,
            instanceDate=target,
            originalId=record.id,
        )
        return RecurringEventInstance.model_validate(data)
