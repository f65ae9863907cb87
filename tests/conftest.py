"""Pytest configuration and shared fixtures for all tests.

This module provides function-scoped fixtures for:
- In-memory and SQLite-backed document stores
- In-memory and SQLite-backed key-value stores
- The session cache, the directory repository and a fake auth provider
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from student_directory.db.documents import (
    DocumentStore,
    MemoryDocumentStore,
    SqlDocumentStore,
)
from student_directory.db.kv import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore
from student_directory.db.session import create_engine
from student_directory.features.session import SessionCache
from student_directory.features.students.repositories import (
    DocumentDirectoryRepository,
)
from tests.utils.doubles import FakeAuthProvider


@pytest_asyncio.fixture(scope="function")
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an aiosqlite engine on a fresh database file.

    Creates a fresh engine for each test to avoid event loop issues.
    """
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def sql_document_store(sqlite_engine: AsyncEngine) -> SqlDocumentStore:
    store = SqlDocumentStore(sqlite_engine)
    await store.create_schema()
    return store


@pytest_asyncio.fixture(params=["memory", "sql"])
async def document_store(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncGenerator[DocumentStore, None]:
    """Provide each document store back-end in turn."""
    if request.param == "memory":
        yield MemoryDocumentStore()
        return

    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}")
    store = SqlDocumentStore(engine)
    await store.create_schema()
    yield store
    await engine.dispose()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def key_value_store(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncGenerator[KeyValueStore, None]:
    """Provide each key-value back-end in turn."""
    if request.param == "memory":
        yield MemoryKeyValueStore()
        return

    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'session.db'}")
    store = SqlKeyValueStore(engine)
    await store.create_schema()
    yield store
    await engine.dispose()


@pytest.fixture
def directory_repository(document_store: DocumentStore) -> DocumentDirectoryRepository:
    return DocumentDirectoryRepository(document_store)


@pytest.fixture
def session_cache(key_value_store: KeyValueStore) -> SessionCache:
    return SessionCache(key_value_store)


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()
