"""Tests for building the service container from settings."""

from pathlib import Path

from student_directory.core.container import build_container, build_memory_container
from student_directory.core.settings import Settings
from student_directory.db.documents import MemoryDocumentStore, SqlDocumentStore
from student_directory.db.kv import MemoryKeyValueStore, SqlKeyValueStore
from student_directory.features.students.models import StudentRecordInput


class TestBuildContainer:
    """Test suite for container assembly."""

    def test_memory_container(self):
        container = build_memory_container(Settings(students_collection="mahasiswa"))

        assert isinstance(container.document_store, MemoryDocumentStore)
        assert isinstance(container.key_value_store, MemoryKeyValueStore)
        assert container.directory_repository.collection_name == "mahasiswa"
        assert container.session_cache.storage is container.key_value_store
        assert container.auth_provider is None

    async def test_sql_container_creates_schema_and_closes(self, tmp_path: Path):
        settings = Settings(
            document_store_url=f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}",
            session_cache_url=f"sqlite+aiosqlite:///{tmp_path / 'session.db'}",
        )

        container = await build_container(settings)
        try:
            assert isinstance(container.document_store, SqlDocumentStore)
            assert isinstance(container.key_value_store, SqlKeyValueStore)
            assert len(container.engines) == 2

            result = await container.directory_repository.create(
                StudentRecordInput(nim="1", nama="Adi", jurusan="Ilmu Komputer")
            )
            assert result.ok
            await container.session_cache.set_remembered_credential("a@b.id", "rahasia")
            assert (await container.session_cache.get_remembered_credential()).is_complete
        finally:
            await container.close()

        assert container.engines == []

    async def test_memory_backends_open_no_engines(self):
        settings = Settings(document_store_backend="memory", session_cache_backend="memory")

        container = await build_container(settings)

        assert container.engines == []
        assert isinstance(container.document_store, MemoryDocumentStore)


class TestSettings:
    def test_database_url_prefers_explicit_url(self):
        settings = Settings(document_store_url="sqlite+aiosqlite:///x.db")

        assert settings.database_url == "sqlite+aiosqlite:///x.db"

    def test_database_url_from_postgres_parts(self):
        settings = Settings(
            document_store_url=None,
            postgres_user="u",
            postgres_password="p",
            postgres_host="db",
            postgres_port=5433,
            postgres_db="mahasiswa",
        )

        assert settings.database_url == "postgresql+asyncpg://u:p@db:5433/mahasiswa"
