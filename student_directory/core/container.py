"""Service container built once per process and shared through the app state.

Stores, the session cache and the directory repository are constructed here
and handed to request handlers by FastAPI dependencies, so no module keeps a
global instance of its own.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncEngine

from student_directory.core.settings import Settings
from student_directory.db.documents import (
    DocumentStore,
    MemoryDocumentStore,
    SqlDocumentStore,
)
from student_directory.db.kv import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore
from student_directory.db.session import create_engine
from student_directory.features.auth.provider import AuthProvider
from student_directory.features.session import SessionCache
from student_directory.features.students.repositories import (
    DirectoryRepository,
    DocumentDirectoryRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Capabilities shared by every request of one process."""

    settings: Settings
    document_store: DocumentStore
    key_value_store: KeyValueStore
    session_cache: SessionCache
    directory_repository: DirectoryRepository
    auth_provider: AuthProvider | None = None
    engines: list[AsyncEngine] = field(default_factory=list)

    async def close(self) -> None:
        """Dispose every engine the container opened."""
        for engine in self.engines:
            await engine.dispose()
        self.engines.clear()


def _assemble(
    settings: Settings,
    document_store: DocumentStore,
    key_value_store: KeyValueStore,
    auth_provider: AuthProvider | None,
    engines: list[AsyncEngine],
) -> ServiceContainer:
    return ServiceContainer(
        settings=settings,
        document_store=document_store,
        key_value_store=key_value_store,
        session_cache=SessionCache(key_value_store),
        directory_repository=DocumentDirectoryRepository(
            document_store, collection_name=settings.students_collection
        ),
        auth_provider=auth_provider,
        engines=engines,
    )


def build_memory_container(
    settings: Settings | None = None, auth_provider: AuthProvider | None = None
) -> ServiceContainer:
    """Build a container whose stores live entirely in memory."""
    return _assemble(
        settings or Settings(),
        MemoryDocumentStore(),
        MemoryKeyValueStore(),
        auth_provider,
        [],
    )


async def build_container(
    settings: Settings, auth_provider: AuthProvider | None = None
) -> ServiceContainer:
    """Build the container for the configured back-ends, creating tables as needed."""
    engines: list[AsyncEngine] = []

    document_store: DocumentStore
    if settings.document_store_backend == "memory":
        document_store = MemoryDocumentStore()
    else:
        engine = create_engine(settings.database_url, echo=settings.debug)
        engines.append(engine)
        document_store = SqlDocumentStore(engine)
        await document_store.create_schema()
    logger.info("Document store: %s", settings.document_store_backend)

    key_value_store: KeyValueStore
    if settings.session_cache_backend == "memory":
        key_value_store = MemoryKeyValueStore()
    else:
        engine = create_engine(settings.session_cache_url, echo=settings.debug)
        engines.append(engine)
        key_value_store = SqlKeyValueStore(engine)
        await key_value_store.create_schema()
    logger.info("Session cache: %s", settings.session_cache_backend)

    return _assemble(settings, document_store, key_value_store, auth_provider, engines)
