"""Local key-value capability and its back-ends."""

from .memory_store import MemoryKeyValueStore
from .protocols import KeyValueStore
from .sql_store import KeyValueItem, SqlKeyValueStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
    "KeyValueItem",
]
