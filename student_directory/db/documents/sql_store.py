"""SQLAlchemy implementation of the DocumentStore protocol.

Documents are kept as JSON in a single `documents` table. Timestamps are
written as fixed-width UTC ISO-8601 strings, so ordering and range filters on
the JSON text give chronological order without a per-field column. On
PostgreSQL the write instant is read from the database server, so every API
process sharing the database stamps documents from the same clock.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable, Mapping
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from typing_extensions import override

from student_directory.core.errors import StoreError
from student_directory.db.documents.models import DocumentRow
from student_directory.db.documents.protocols import (
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    MonotonicClock,
    resolve_server_timestamps,
)
from student_directory.db.session import create_session_factory

logger = logging.getLogger(__name__)

# SQLSTATE insufficient_privilege
PERMISSION_SQLSTATES = frozenset({"42501"})

DatabaseClock = Callable[[AsyncSession], Awaitable[datetime]]


async def postgres_clock(session: AsyncSession) -> datetime:
    """Read the current time from the PostgreSQL server."""
    result = await session.execute(select(func.clock_timestamp()))
    return result.scalar_one()


def _format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def _encode(data: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
    encoded: dict[str, Any] = {}
    timestamp_fields: list[str] = []
    for key, value in data.items():
        if isinstance(value, datetime):
            encoded[key] = _format_timestamp(value)
            timestamp_fields.append(key)
        else:
            encoded[key] = value
    return encoded, timestamp_fields


def _decode(row: DocumentRow) -> dict[str, Any]:
    data = dict(row.data)
    for key in row.timestamp_fields:
        value = data.get(key)
        if isinstance(value, str):
            data[key] = datetime.fromisoformat(value)
    return data


def _translate_error(exc: Exception) -> StoreError:
    if isinstance(exc, DBAPIError):
        orig = exc.orig
        sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
        if sqlstate in PERMISSION_SQLSTATES or "readonly" in str(orig).lower():
            return StoreError.permission(str(orig))
    return StoreError.transport(str(exc))


class SqlDocumentStore(DocumentStore):
    """Document store on PostgreSQL (asyncpg) or SQLite (aiosqlite)."""

    range_sentinel: str = "\U0010ffff"

    def __init__(
        self,
        engine: AsyncEngine,
        clock: Callable[[], datetime] | None = None,
        database_clock: DatabaseClock | None = None,
    ):
        """Initialize the store.

        Args:
            engine: Async engine for the database holding the documents table.
            clock: Optional process time source, defaults to UTC wall clock.
            database_clock: Reads "now" inside a write transaction. Defaults to
                the server clock on PostgreSQL; other dialects use `clock`.
        """
        self.engine: AsyncEngine = engine
        self._session_factory = create_session_factory(engine)
        self._clock = MonotonicClock(clock)
        if database_clock is None and engine.dialect.name == "postgresql":
            database_clock = postgres_clock
        self._database_clock: DatabaseClock | None = database_clock
        # Comparisons must be byte-wise for case-sensitive prefix ranges.
        self._collation: str | None = (
            "C" if engine.dialect.name == "postgresql" else None
        )

    async def create_schema(self) -> None:
        """Create the documents table if it does not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(DocumentRow.__table__.create, checkfirst=True)

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except StoreError:
            raise
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            raise _translate_error(exc) from exc

    def _field(self, name: str):
        expr = DocumentRow.data[name].as_string()
        if self._collation:
            expr = expr.collate(self._collation)
        return expr

    async def _find(
        self, session: AsyncSession, collection: str, doc_id: str, lock: bool = False
    ) -> DocumentRow | None:
        stmt = select(DocumentRow).where(
            DocumentRow.collection == collection, DocumentRow.doc_id == doc_id
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @override
    def server_now(self) -> datetime:
        return self._clock()

    async def _write_now(
        self, session: AsyncSession, data: Mapping[str, Any]
    ) -> datetime:
        """Return the instant stamped on this write, shared by every replica."""
        if self._database_clock is None or not any(
            value is SERVER_TIMESTAMP for value in data.values()
        ):
            return self.server_now()
        return await self._database_clock(session)

    @override
    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        async with self._transaction() as session:
            now = await self._write_now(session, data)
            encoded, timestamp_fields = _encode(resolve_server_timestamps(data, now))
            session.add(
                DocumentRow(
                    collection=collection,
                    doc_id=doc_id,
                    data=encoded,
                    timestamp_fields=timestamp_fields,
                )
            )
        logger.debug("Added document %s/%s", collection, doc_id)
        return doc_id

    @override
    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        async with self._transaction() as session:
            row = await self._find(session, collection, doc_id, lock=True)
            previous = _decode(row) if row else None
            now = await self._write_now(session, data)
            encoded, timestamp_fields = _encode(
                resolve_server_timestamps(data, now, previous)
            )
            if row is None:
                session.add(
                    DocumentRow(
                        collection=collection,
                        doc_id=doc_id,
                        data=encoded,
                        timestamp_fields=timestamp_fields,
                    )
                )
            else:
                row.data = encoded
                row.timestamp_fields = timestamp_fields

    @override
    async def update(
        self, collection: str, doc_id: str, data: Mapping[str, Any]
    ) -> None:
        async with self._transaction() as session:
            row = await self._find(session, collection, doc_id, lock=True)
            if row is None:
                raise StoreError.not_found(collection, doc_id)
            previous = _decode(row)
            now = await self._write_now(session, data)
            merged = {**previous, **resolve_server_timestamps(data, now, previous)}
            encoded, timestamp_fields = _encode(merged)
            # Assign new objects so the JSON columns are flagged dirty.
            row.data = encoded
            row.timestamp_fields = timestamp_fields

    @override
    async def delete(self, collection: str, doc_id: str) -> None:
        async with self._transaction() as session:
            await session.execute(
                delete(DocumentRow).where(
                    DocumentRow.collection == collection,
                    DocumentRow.doc_id == doc_id,
                )
            )

    @override
    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        async with self._transaction() as session:
            row = await self._find(session, collection, doc_id)
            if row is None:
                return None
            return DocumentSnapshot(id=row.doc_id, data=_decode(row))

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
        field = self._field(order_by)
        stmt = select(DocumentRow).where(
            DocumentRow.collection == collection,
            DocumentRow.data[order_by].as_string().is_not(None),
        )
        if start_at is not None:
            stmt = stmt.where(field >= start_at)
        if end_before is not None:
            stmt = stmt.where(field < end_before)
        stmt = stmt.order_by(
            field.desc() if descending else field.asc(),
            DocumentRow.seq.asc(),
        )

        async with self._transaction() as session:
            result = await session.execute(stmt)
            return [
                DocumentSnapshot(id=row.doc_id, data=_decode(row))
                for row in result.scalars().all()
            ]
