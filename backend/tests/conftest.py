"""
Shared fixtures for sidecal tests.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from sidecal.core.constants import RECURRING_EVENTS_KEY
from sidecal.infrastructure.local.database import get_session_factory, init_db
from sidecal.infrastructure.local.memory_store import InMemoryKeyValueStore
from sidecal.services.recurrence_resolver import RecurrenceResolver
from sidecal.services.recurrence_store import RecurrenceStore
from sidecal.services.series_mutator import SeriesMutator


@pytest.fixture
def memory_store():
    """Empty in-memory key/value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def recurrence_store(memory_store):
    """Recurrence store adapter over the in-memory store."""
    return RecurrenceStore(memory_store)


@pytest.fixture
def resolver(recurrence_store):
    return RecurrenceResolver(recurrence_store)


@pytest.fixture
def mutator(recurrence_store):
    return SeriesMutator(recurrence_store)


@pytest.fixture
def seed(memory_store):
    """Write recurring-event documents into the store."""

    async def _seed(*documents: dict) -> None:
        await memory_store.set({RECURRING_EVENTS_KEY: list(documents)})

    return _seed


@pytest_asyncio.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield get_session_factory(engine)
    await engine.dispose()
