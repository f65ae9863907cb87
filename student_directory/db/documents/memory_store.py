"""In-process implementation of the DocumentStore protocol.

Useful for local development and tests. Data lives in plain dictionaries and
is copied on the way in and out so callers never share state with the store.
"""

import copy
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from typing_extensions import override

from student_directory.core.errors import StoreError
from student_directory.db.documents.protocols import (
    DocumentSnapshot,
    DocumentStore,
    MonotonicClock,
    resolve_server_timestamps,
)


class MemoryDocumentStore(DocumentStore):
    """Dictionary-backed document store.

    Collections are insertion-ordered dicts keyed by document id, which gives
    the stable tie order queries promise.
    """

    range_sentinel: str = "\U0010ffff"

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._clock = MonotonicClock(clock)

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    @override
    def server_now(self) -> datetime:
        return self._clock()

    @override
    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self._collection(collection)[doc_id] = copy.deepcopy(
            resolve_server_timestamps(data, self.server_now())
        )
        return doc_id

    @override
    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        docs = self._collection(collection)
        previous = docs.get(doc_id)
        docs[doc_id] = copy.deepcopy(
            resolve_server_timestamps(data, self.server_now(), previous)
        )

    @override
    async def update(
        self, collection: str, doc_id: str, data: Mapping[str, Any]
    ) -> None:
        docs = self._collection(collection)
        existing = docs.get(doc_id)
        if existing is None:
            raise StoreError.not_found(collection, doc_id)
        changes = resolve_server_timestamps(data, self.server_now(), existing)
        docs[doc_id] = {**existing, **copy.deepcopy(changes)}

    @override
    async def delete(self, collection: str, doc_id: str) -> None:
        self._collection(collection).pop(doc_id, None)

    @override
    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        data = self._collection(collection).get(doc_id)
        if data is None:
            return None
        return DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))

    @override
    async def query(
        self,
        collection: str,
        *,
        order_by: str,
        descending: bool = False,
        start_at: str | None = None,
        end_before: str | None = None,
    ) -> list[DocumentSnapshot]:
        matches = []
        for doc_id, data in self._collection(collection).items():
            value = data.get(order_by)
            if value is None:
                continue
            bounded = start_at is not None or end_before is not None
            if bounded and not isinstance(value, str):
                continue
            if start_at is not None and value < start_at:
                continue
            if end_before is not None and value >= end_before:
                continue
            matches.append((value, doc_id, data))

        # sorted() is stable with reverse=True too, so ties stay in insertion order.
        matches.sort(key=lambda item: item[0], reverse=descending)
        return [
            DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))
            for _, doc_id, data in matches
        ]
