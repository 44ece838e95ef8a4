"""
SQLite implementation of the key/value store.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from sidecal.core.exceptions import InfrastructureError
from sidecal.core.logger import setup_logger
from sidecal.infrastructure.local.database import KeyValueORM, get_session_factory
from sidecal.interfaces.key_value_store import IKeyValueStore

logger = setup_logger(__name__)


class SqliteKeyValueStore(IKeyValueStore):
    """SQLite implementation of the key/value store. One row per key."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def get(self, key: str, default: Any = None) -> Any:
        """Get the value stored under a key."""
        try:
            async with self._session_factory() as session:
                orm = await session.get(KeyValueORM, key)
                if orm is None:
                    return default
                return orm.value
        except SQLAlchemyError as e:
            logger.error(f"Failed to read key {key}: {e}")
            raise InfrastructureError(f"Failed to read key {key}: {e}") from e

    async def set(self, values: dict[str, Any]) -> None:
        """Upsert every key of the mapping in a single transaction."""
        try:
            async with self._session_factory() as session:
                for key, value in values.items():
                    orm = await session.get(KeyValueORM, key)
                    if orm is None:
                        session.add(KeyValueORM(key=key, value=value))
                    else:
                        orm.value = value
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write keys {sorted(values)}: {e}")
            raise InfrastructureError(f"Failed to write keys: {e}") from e

    async def remove(self, keys: str | Iterable[str]) -> None:
        """Delete rows for the given keys."""
        if isinstance(keys, str):
            keys = [keys]
        keys = list(keys)
        if not keys:
            return
        try:
            async with self._session_factory() as session:
                await session.execute(delete(KeyValueORM).where(KeyValueORM.key.in_(keys)))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to remove keys {keys}: {e}")
            raise InfrastructureError(f"Failed to remove keys: {e}") from e
