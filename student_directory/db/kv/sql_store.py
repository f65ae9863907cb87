"""SQLAlchemy implementation of the KeyValueStore protocol.

Meant for a local SQLite file (aiosqlite); every call runs in its own
transaction, which is what makes each key independently atomic.
"""

from collections.abc import AsyncGenerator, Iterable
from contextlib import asynccontextmanager

from sqlalchemy import String, Text, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import Mapped, mapped_column
from typing_extensions import override

from student_directory.core.errors import StoreError
from student_directory.db.kv.protocols import KeyValueStore
from student_directory.db.session import Base, create_session_factory


class KeyValueItem(Base):
    """A single persisted key."""

    __tablename__ = "kv_items"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class SqlKeyValueStore(KeyValueStore):
    """Key-value store kept in the `kv_items` table."""

    def __init__(self, engine: AsyncEngine):
        self.engine: AsyncEngine = engine
        self._session_factory = create_session_factory(engine)

    async def create_schema(self) -> None:
        """Create the kv_items table if it does not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(KeyValueItem.__table__.create, checkfirst=True)

    @asynccontextmanager
    async def _transaction(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError.transport(str(exc)) from exc

    @override
    async def get_item(self, key: str) -> str | None:
        async with self._transaction() as session:
            result = await session.execute(
                select(KeyValueItem.value).where(KeyValueItem.key == key)
            )
            return result.scalar_one_or_none()

    @override
    async def set_item(self, key: str, value: str) -> None:
        async with self._transaction() as session:
            item = await session.get(KeyValueItem, key)
            if item is None:
                session.add(KeyValueItem(key=key, value=value))
            else:
                item.value = value

    @override
    async def remove_item(self, key: str) -> None:
        async with self._transaction() as session:
            await session.execute(delete(KeyValueItem).where(KeyValueItem.key == key))

    @override
    async def multi_remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        async with self._transaction() as session:
            await session.execute(
                delete(KeyValueItem).where(KeyValueItem.key.in_(keys))
            )
