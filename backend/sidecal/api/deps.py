"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from sidecal.core.config import get_settings
from sidecal.interfaces.key_value_store import IKeyValueStore
from sidecal.services.recurrence_resolver import RecurrenceResolver
from sidecal.services.recurrence_store import RecurrenceStore
from sidecal.services.series_mutator import SeriesMutator


# ===========================================
# Storage Dependencies
# ===========================================


@lru_cache()
def get_key_value_store() -> IKeyValueStore:
    """Get key/value store instance."""
    settings = get_settings()
    if settings.STORAGE_BACKEND == "memory":
        from sidecal.infrastructure.local.memory_store import InMemoryKeyValueStore
        return InMemoryKeyValueStore()
    elif settings.STORAGE_BACKEND == "json":
        from sidecal.infrastructure.local.json_file_store import JsonFileKeyValueStore
        return JsonFileKeyValueStore(settings.STORAGE_BASE_PATH, settings.STORAGE_FILE_NAME)
    else:
        from sidecal.infrastructure.local.sqlite_store import SqliteKeyValueStore
        return SqliteKeyValueStore()


@lru_cache()
def get_recurrence_store() -> RecurrenceStore:
    """Get recurrence store adapter instance."""
    return RecurrenceStore(get_key_value_store())


# ===========================================
# Service Dependencies
# ===========================================


def get_recurrence_resolver(
    store: Annotated[RecurrenceStore, Depends(get_recurrence_store)],
) -> RecurrenceResolver:
    """Get recurrence resolver (stateless, one per request)."""
    return RecurrenceResolver(store)


@lru_cache()
def get_series_mutator() -> SeriesMutator:
    """Get the process-wide series mutator, shared so its lock serializes writes."""
    return SeriesMutator(get_recurrence_store())


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

Resolver = Annotated[RecurrenceResolver, Depends(get_recurrence_resolver)]
Mutator = Annotated[SeriesMutator, Depends(get_series_mutator)]
