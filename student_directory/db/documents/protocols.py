"""Protocol definition and types for document store operations."""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol, TypedDict

TIMESTAMP_RESOLUTION = timedelta(microseconds=1)


class ServerTimestamp:
    """Placeholder replaced by the store's clock when a write is applied."""

    _instance: "ServerTimestamp | None" = None

    def __new__(cls) -> "ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"

    def __copy__(self) -> "ServerTimestamp":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "ServerTimestamp":
        return self


SERVER_TIMESTAMP = ServerTimestamp()


class DocumentSnapshot(TypedDict):
    """A stored document: its id and a copy of its fields."""

    id: str
    data: dict[str, Any]


class DocumentStore(Protocol):
    """Protocol for a remote collection-of-documents store.

    Every method raises `StoreError` when the back-end fails. Values equal to
    `SERVER_TIMESTAMP` are resolved by the store at write time.
    """

    range_sentinel: str
    """A value guaranteed to sort after all valid input, bounding prefix ranges."""

    def server_now(self) -> datetime:
        """Return the store's current time."""
        ...

    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        """Create a document with a store-assigned id and return the id."""
        ...

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or fully overwrite the document at `doc_id`."""
        ...

    async def update(
        self, collection: str, doc_id: str, data: Mapping[str, Any]
    ) -> None:
        """Merge fields into an existing document, raising not_found when missing."""
        ...

    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document succeeds."""
        ...

    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        """Fetch a document by id."""
        ...

    async def query(
        self,
        collection: str,
        *,
        order_by: str,
        descending: bool = False,
        start_at: str | None = None,
        end_before: str | None = None,
    ) -> list[DocumentSnapshot]:
        """Return documents ordered by a field, optionally bounded to a range.

        The range is half-open, `[start_at, end_before)`. Documents without the
        ordering field are left out. Ties keep insertion order.
        """
        ...


class MonotonicClock:
    """Wall clock that never returns the same or an earlier instant twice."""

    def __init__(self, now: Callable[[], datetime] | None = None):
        self._now = now or (lambda: datetime.now(UTC))
        self._last: datetime | None = None

    def __call__(self) -> datetime:
        current = self._now()
        if self._last is not None and current <= self._last:
            current = self._last + TIMESTAMP_RESOLUTION
        self._last = current
        return current


def resolve_server_timestamps(
    data: Mapping[str, Any],
    now: datetime,
    previous: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Replace SERVER_TIMESTAMP values with `now`.

    A field that already holds a timestamp at or after `now` is moved one tick
    past it, so a document's timestamps only ever increase.
    """
    resolved: dict[str, Any] = {}
    for key, value in data.items():
        if value is SERVER_TIMESTAMP:
            stamp = now
            earlier = previous.get(key) if previous else None
            if isinstance(earlier, datetime) and stamp <= earlier:
                stamp = earlier + TIMESTAMP_RESOLUTION
            resolved[key] = stamp
        else:
            resolved[key] = value
    return resolved
