"""Abstract interfaces for infrastructure abstraction."""

from sidecal.interfaces.key_value_store import IKeyValueStore

__all__ = [
    "IKeyValueStore",
]
