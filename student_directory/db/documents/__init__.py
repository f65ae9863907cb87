"""Document store capability and its back-ends."""

from .memory_store import MemoryDocumentStore
from .protocols import (
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    MonotonicClock,
    ServerTimestamp,
    resolve_server_timestamps,
)
from .sql_store import SqlDocumentStore

__all__ = [
    # Implementations
    "MemoryDocumentStore",
    "SqlDocumentStore",
    # Protocol and types
    "DocumentStore",
    "DocumentSnapshot",
    "ServerTimestamp",
    "SERVER_TIMESTAMP",
    "MonotonicClock",
    "resolve_server_timestamps",
]
