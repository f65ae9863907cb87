"""Behaviour shared by every DocumentStore back-end.

Each test runs against the memory store and the SQL store on SQLite.
"""

from datetime import UTC, datetime, timedelta

import pytest

from student_directory.core.errors import StoreError, StoreErrorKind
from student_directory.db.documents import (
    SERVER_TIMESTAMP,
    DocumentStore,
    MemoryDocumentStore,
    MonotonicClock,
    resolve_server_timestamps,
)

COLLECTION = "students"


class TestWrites:
    """Tests for add, set, update and delete."""

    async def test_add_assigns_distinct_ids(self, document_store: DocumentStore) -> None:
        first = await document_store.add(COLLECTION, {"nama": "Adi"})
        second = await document_store.add(COLLECTION, {"nama": "Adi"})

        assert first != second
        snapshot = await document_store.get(COLLECTION, first)
        assert snapshot is not None
        assert snapshot["data"] == {"nama": "Adi"}

    async def test_server_timestamps_share_one_instant_per_write(
        self, document_store: DocumentStore
    ) -> None:
        doc_id = await document_store.add(
            COLLECTION, {"createdAt": SERVER_TIMESTAMP, "updatedAt": SERVER_TIMESTAMP}
        )

        snapshot = await document_store.get(COLLECTION, doc_id)
        assert snapshot is not None
        data = snapshot["data"]
        assert isinstance(data["createdAt"], datetime)
        assert data["createdAt"] == data["updatedAt"]

    async def test_update_merges_fields(self, document_store: DocumentStore) -> None:
        doc_id = await document_store.add(COLLECTION, {"nama": "Adi", "nim": "1"})

        await document_store.update(COLLECTION, doc_id, {"nim": "2", "alamat": "Bogor"})

        snapshot = await document_store.get(COLLECTION, doc_id)
        assert snapshot is not None
        assert snapshot["data"] == {"nama": "Adi", "nim": "2", "alamat": "Bogor"}

    async def test_update_missing_document_raises_not_found(
        self, document_store: DocumentStore
    ) -> None:
        with pytest.raises(StoreError) as exc_info:
            await document_store.update(COLLECTION, "missing", {"nama": "Adi"})

        assert exc_info.value.kind == StoreErrorKind.NOT_FOUND

    async def test_update_moves_timestamp_forward(
        self, document_store: DocumentStore
    ) -> None:
        doc_id = await document_store.add(
            COLLECTION, {"createdAt": SERVER_TIMESTAMP, "updatedAt": SERVER_TIMESTAMP}
        )
        await document_store.update(COLLECTION, doc_id, {"updatedAt": SERVER_TIMESTAMP})
        await document_store.update(COLLECTION, doc_id, {"updatedAt": SERVER_TIMESTAMP})

        snapshot = await document_store.get(COLLECTION, doc_id)
        assert snapshot is not None
        assert snapshot["data"]["updatedAt"] > snapshot["data"]["createdAt"]

    async def test_set_creates_and_overwrites(self, document_store: DocumentStore) -> None:
        await document_store.set("users", "uid-1", {"nama": "Adi", "role": "user"})
        await document_store.set("users", "uid-1", {"nama": "Adinda"})

        snapshot = await document_store.get("users", "uid-1")
        assert snapshot is not None
        assert snapshot["data"] == {"nama": "Adinda"}

    async def test_delete_is_idempotent(self, document_store: DocumentStore) -> None:
        doc_id = await document_store.add(COLLECTION, {"nama": "Adi"})

        await document_store.delete(COLLECTION, doc_id)
        await document_store.delete(COLLECTION, doc_id)
        await document_store.delete(COLLECTION, "never-existed")

        assert await document_store.get(COLLECTION, doc_id) is None

    async def test_collections_are_isolated(self, document_store: DocumentStore) -> None:
        doc_id = await document_store.add(COLLECTION, {"nama": "Adi"})

        assert await document_store.get("users", doc_id) is None


class TestQuery:
    """Tests for ordered and range queries."""

    async def test_orders_descending_with_ties_in_insertion_order(
        self, document_store: DocumentStore
    ) -> None:
        ids = [
            await document_store.add(COLLECTION, {"rank": rank, "nama": name})
            for rank, name in [("b", "first-b"), ("a", "a"), ("b", "second-b"), ("c", "c")]
        ]

        results = await document_store.query(COLLECTION, order_by="rank", descending=True)

        assert [r["data"]["nama"] for r in results] == ["c", "first-b", "second-b", "a"]
        assert {r["id"] for r in results} == set(ids)

    async def test_half_open_range_is_case_sensitive(
        self, document_store: DocumentStore
    ) -> None:
        for name in ["Budi", "Adinda", "adi", "Adi", "Ad"]:
            await document_store.add(COLLECTION, {"nama": name})

        results = await document_store.query(
            COLLECTION,
            order_by="nama",
            start_at="Adi",
            end_before="Adi" + document_store.range_sentinel,
        )

        assert [r["data"]["nama"] for r in results] == ["Adi", "Adinda"]

    async def test_documents_without_order_field_are_skipped(
        self, document_store: DocumentStore
    ) -> None:
        await document_store.add(COLLECTION, {"nama": "Adi"})
        await document_store.add(COLLECTION, {"nim": "123"})

        results = await document_store.query(COLLECTION, order_by="nama")

        assert [r["data"]["nama"] for r in results] == ["Adi"]

    async def test_orders_by_server_timestamp(self, document_store: DocumentStore) -> None:
        for name in ["first", "second", "third"]:
            await document_store.add(
                COLLECTION, {"nama": name, "createdAt": SERVER_TIMESTAMP}
            )

        results = await document_store.query(
            COLLECTION, order_by="createdAt", descending=True
        )

        assert [r["data"]["nama"] for r in results] == ["third", "second", "first"]


class TestServerClock:
    """Tests for the timestamp helpers."""

    def test_monotonic_clock_never_repeats(self) -> None:
        fixed = datetime(2024, 1, 1, tzinfo=UTC)
        clock = MonotonicClock(lambda: fixed)

        first, second = clock(), clock()

        assert first == fixed
        assert second > first

    def test_resolve_bumps_past_previous_value(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=UTC)
        later = now + timedelta(seconds=5)

        resolved = resolve_server_timestamps(
            {"updatedAt": SERVER_TIMESTAMP, "nama": "Adi"}, now, {"updatedAt": later}
        )

        assert resolved["updatedAt"] > later
        assert resolved["nama"] == "Adi"

    async def test_memory_store_copies_data(self) -> None:
        store = MemoryDocumentStore()
        payload = {"tags": ["a"]}
        doc_id = await store.add(COLLECTION, payload)
        payload["tags"].append("b")

        snapshot = await store.get(COLLECTION, doc_id)
        assert snapshot is not None
        snapshot["data"]["tags"].append("c")

        again = await store.get(COLLECTION, doc_id)
        assert again is not None
        assert again["data"] == {"tags": ["a"]}
