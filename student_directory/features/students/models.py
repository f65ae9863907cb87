"""Student record models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Programs offered by the picker; other names are still accepted.
JURUSAN_OPTIONS: tuple[str, ...] = (
    "Teknik Informatika",
    "Sistem Informasi",
    "Teknik Komputer",
    "Manajemen Informatika",
    "Ilmu Komputer",
    "Teknologi Informasi",
)

WRITABLE_FIELDS: tuple[str, ...] = (
    "nim",
    "nama",
    "jurusan",
    "angkatan",
    "email",
    "telepon",
    "alamat",
)

CREATED_AT_FIELD = "createdAt"
UPDATED_AT_FIELD = "updatedAt"


class StudentRecordInput(BaseModel):
    """Writable fields of a new student record.

    Required fields default to blank so that a missing value is reported by
    the validator rather than by model parsing.
    """

    nim: str = ""
    nama: str = ""
    jurusan: str = ""
    angkatan: str = ""
    email: str = ""
    telepon: str = ""
    alamat: str = ""

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump()


class StudentRecordUpdate(BaseModel):
    """A partial update; only fields explicitly set are written."""

    nim: str | None = None
    nama: str | None = None
    jurusan: str | None = None
    angkatan: str | None = None
    email: str | None = None
    telepon: str | None = None
    alamat: str | None = None

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class StudentRecord(BaseModel):
    """A persisted student record."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    nim: str = ""
    nama: str = ""
    jurusan: str = ""
    angkatan: str = ""
    email: str = ""
    telepon: str = ""
    alamat: str = ""
    created_at: datetime | None = Field(default=None, alias=CREATED_AT_FIELD)
    updated_at: datetime | None = Field(default=None, alias=UPDATED_AT_FIELD)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "StudentRecord":
        known = {
            key: value
            for key, value in data.items()
            if key in WRITABLE_FIELDS or key in (CREATED_AT_FIELD, UPDATED_AT_FIELD)
        }
        # Documents written by other clients may hold nulls for optional fields.
        cleaned = {key: value for key, value in known.items() if value is not None}
        return cls(id=doc_id, **cleaned)
