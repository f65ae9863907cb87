"""Student directory data transfer objects."""

from pydantic import BaseModel, field_validator

from student_directory.core.validation import digits_only
from student_directory.features.students.models import (
    StudentRecord,
    StudentRecordInput,
    StudentRecordUpdate,
)


class CreateStudentRequest(StudentRecordInput):
    """Request model for adding a student. Non-digits in `angkatan` are dropped."""

    @field_validator("angkatan", mode="before")
    @classmethod
    def _strip_angkatan(cls, value: object) -> object:
        return digits_only(value) if isinstance(value, str) else value


class UpdateStudentRequest(StudentRecordUpdate):
    """Request model for editing a student."""

    @field_validator("angkatan", mode="before")
    @classmethod
    def _strip_angkatan(cls, value: object) -> object:
        return digits_only(value) if isinstance(value, str) else value


class CreateStudentResponse(BaseModel):
    """Response model for a created student."""

    message: str
    id: str


class StudentResponse(BaseModel):
    """Response model for a single student."""

    student: StudentRecord


class StudentListResponse(BaseModel):
    """Response model for listings and searches."""

    students: list[StudentRecord]
    total: int


class StudentMessageResponse(BaseModel):
    """Response model for updates and deletions."""

    message: str
    id: str


class ProgramsResponse(BaseModel):
    """The suggested program (jurusan) names."""

    programs: list[str]
