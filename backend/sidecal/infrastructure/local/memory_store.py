"""
In-memory key/value store.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Optional

from sidecal.interfaces.key_value_store import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """
    Process-local key/value store.

    Values are deep-copied in both directions so callers never share
    mutable state with the store.
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    async def set(self, values: dict[str, Any]) -> None:
        self._data.update(copy.deepcopy(values))

    async def remove(self, keys: str | Iterable[str]) -> None:
        if isinstance(keys, str):
            keys = [keys]
        for key in keys:
            self._data.pop(key, None)
