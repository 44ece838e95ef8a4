"""
Key/value store interface.

Defines the persistence contract the recurrence engine depends on. Values
are JSON-serializable objects keyed by string.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable


class IKeyValueStore(ABC):
    """Abstract interface for key/value persistence."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """
        Get the value stored under a key.

        Args:
            key: Storage key
            default: Value returned when the key is absent

        Returns:
            The stored value, or ``default`` if the key does not exist

        Raises:
            InfrastructureError: If the underlying read fails
        """
        pass

    @abstractmethod
    async def set(self, values: dict[str, Any]) -> None:
        """
        Persist every key of a mapping.

        All-or-nothing from the caller's point of view.

        Raises:
            InfrastructureError: If the underlying write fails
        """
        pass

    @abstractmethod
    async def remove(self, keys: str | Iterable[str]) -> None:
        """Remove one or more keys. Missing keys are ignored."""
        pass
