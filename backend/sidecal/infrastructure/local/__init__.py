"""Local key/value store implementations."""

from sidecal.infrastructure.local.json_file_store import JsonFileKeyValueStore
from sidecal.infrastructure.local.memory_store import InMemoryKeyValueStore
from sidecal.infrastructure.local.sqlite_store import SqliteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "SqliteKeyValueStore",
]
