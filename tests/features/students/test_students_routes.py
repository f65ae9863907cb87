"""API tests for the student directory routes."""

from collections.abc import AsyncGenerator
from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from student_directory.core.container import ServiceContainer, build_memory_container
from student_directory.core.errors import StoreError, StoreErrorKind
from student_directory.features.students.repositories import (
    DocumentDirectoryRepository,
)
from student_directory.main import create_app
from tests.utils.doubles import RecordingDocumentStore

BASE = "/api/v1/students"


@pytest.fixture
def container() -> ServiceContainer:
    return build_memory_container()


@pytest_asyncio.fixture
async def client(container: ServiceContainer) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(container=container)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _add(client: AsyncClient, nama: str, **extra: str) -> str:
    payload = {"nim": "2021001", "nama": nama, "jurusan": "Teknik Informatika", **extra}
    response = await client.post(BASE, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestStudentRoutes:
    """Test suite for the /students endpoints."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_create_then_fetch(self, client: AsyncClient):
        response = await client.post(
            BASE,
            json={
                "nim": "2021001",
                "nama": "Adi",
                "jurusan": "Teknik Informatika",
                "angkatan": "20-21",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Data mahasiswa berhasil ditambahkan"

        fetched = await client.get(f"{BASE}/{body['id']}")
        assert fetched.status_code == 200
        student = fetched.json()["student"]
        assert student["nama"] == "Adi"
        assert student["angkatan"] == "2021"
        assert student["createdAt"] == student["updatedAt"]

    async def test_invalid_record_is_rejected_with_field_issues(
        self, client: AsyncClient, container: ServiceContainer
    ):
        response = await client.post(
            BASE, json={"nim": "2021001", "nama": "", "jurusan": ""}
        )

        assert response.status_code == 422
        issues = response.json()["detail"]["issues"]
        assert issues == [
            {"field": "nama", "reason": "Nama harus diisi"},
            {"field": "jurusan", "reason": "Jurusan harus dipilih"},
        ]
        assert (await container.directory_repository.list_all()).value == []

    async def test_list_and_prefix_search(self, client: AsyncClient):
        for name in ["Adi", "Budi", "Adinda", "adi"]:
            await _add(client, name)

        listing = await client.get(BASE)
        search = await client.get(BASE, params={"prefix": "Ad"})
        empty = await client.get(BASE, params={"prefix": "Zzz"})

        assert [s["nama"] for s in listing.json()["students"]] == [
            "adi",
            "Adinda",
            "Budi",
            "Adi",
        ]
        assert listing.json()["total"] == 4
        assert [s["nama"] for s in search.json()["students"]] == ["Adi", "Adinda"]
        assert empty.status_code == 200
        assert empty.json() == {"students": [], "total": 0}

    async def test_partial_update(self, client: AsyncClient):
        student_id = await _add(client, "Adi", alamat="Bogor")

        response = await client.patch(f"{BASE}/{student_id}", json={"alamat": "Depok"})

        assert response.status_code == 200
        assert response.json()["message"] == "Data mahasiswa berhasil diupdate"
        student = (await client.get(f"{BASE}/{student_id}")).json()["student"]
        assert student["alamat"] == "Depok"
        assert student["nama"] == "Adi"
        assert datetime.fromisoformat(student["updatedAt"]) > datetime.fromisoformat(
            student["createdAt"]
        )

    async def test_update_with_blank_name_is_rejected(self, client: AsyncClient):
        student_id = await _add(client, "Adi")

        response = await client.patch(f"{BASE}/{student_id}", json={"nama": " "})

        assert response.status_code == 422
        student = (await client.get(f"{BASE}/{student_id}")).json()["student"]
        assert student["nama"] == "Adi"

    async def test_update_unknown_student_is_404(self, client: AsyncClient):
        response = await client.patch(f"{BASE}/missing", json={"nama": "Adi"})

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    async def test_delete_is_idempotent(self, client: AsyncClient):
        student_id = await _add(client, "Adi")

        first = await client.delete(f"{BASE}/{student_id}")
        second = await client.delete(f"{BASE}/{student_id}")

        assert first.status_code == second.status_code == 200
        assert first.json()["message"] == "Data berhasil dihapus"
        assert (await client.get(f"{BASE}/{student_id}")).status_code == 404

    async def test_programs(self, client: AsyncClient):
        response = await client.get(f"{BASE}/programs")

        assert response.status_code == 200
        assert "Teknik Informatika" in response.json()["programs"]


class TestStoreFailuresOverHttp:
    @pytest.mark.parametrize(
        "kind,status_code",
        [(StoreErrorKind.TRANSPORT, 503), (StoreErrorKind.PERMISSION, 403)],
    )
    async def test_store_failure_maps_to_status(
        self, kind: StoreErrorKind, status_code: int
    ):
        container = build_memory_container()
        container.directory_repository = DocumentDirectoryRepository(
            RecordingDocumentStore(fail_with=StoreError(kind, "boom"))
        )
        app = create_app(container=container)

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.get(BASE)

        assert response.status_code == status_code
        assert response.json()["detail"] == {"kind": kind.value, "message": "boom"}

    async def test_requests_before_startup_are_503(self):
        app = create_app(container=None, settings=build_memory_container().settings)

        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.get(BASE)

        assert response.status_code == 503
