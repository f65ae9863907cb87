"""Student directory API routes."""

from typing import Protocol

from fastapi import APIRouter, Depends, Query, status

from student_directory.core.dependencies import get_directory_repository
from student_directory.core.errors import FieldValidationError, StoreError
from student_directory.core.http_errors import http_exception_for
from student_directory.core.result import Result
from student_directory.features.students.dtos import (
    CreateStudentRequest,
    CreateStudentResponse,
    ProgramsResponse,
    StudentListResponse,
    StudentMessageResponse,
    StudentResponse,
    UpdateStudentRequest,
)
from student_directory.features.students.models import (
    JURUSAN_OPTIONS,
    StudentRecordInput,
    StudentRecordUpdate,
)
from student_directory.features.students.repositories import DirectoryRepository
from student_directory.features.students.usecases import (
    CreateStudentUseCaseImpl,
    UpdateStudentUseCaseImpl,
)

router = APIRouter(prefix="/students", tags=["students"])


class CreateStudentUseCase(Protocol):
    """Protocol for the create student use case."""

    async def execute(
        self, fields: StudentRecordInput
    ) -> Result[str, FieldValidationError | StoreError]:
        """Validate and add a student."""
        ...


class UpdateStudentUseCase(Protocol):
    """Protocol for the update student use case."""

    async def execute(
        self, student_id: str, fields: StudentRecordUpdate
    ) -> Result[None, FieldValidationError | StoreError]:
        """Validate and merge fields into a student."""
        ...


def get_create_student_use_case(
    repository: DirectoryRepository = Depends(get_directory_repository),
) -> CreateStudentUseCase:
    """Dependency injection for the create student use case."""
    return CreateStudentUseCaseImpl(repository=repository)


def get_update_student_use_case(
    repository: DirectoryRepository = Depends(get_directory_repository),
) -> UpdateStudentUseCase:
    """Dependency injection for the update student use case."""
    return UpdateStudentUseCaseImpl(repository=repository)


@router.get("", response_model=StudentListResponse)
async def list_students(
    prefix: str | None = Query(
        None, description="Case-sensitive name prefix; omit to list newest first"
    ),
    repository: DirectoryRepository = Depends(get_directory_repository),
) -> StudentListResponse:
    """List students newest first, or search them by name prefix."""
    if prefix is None:
        result = await repository.list_all()
    else:
        result = await repository.search_by_name_prefix(prefix)
    if not result.ok:
        raise http_exception_for(result.error)
    students = result.value or []
    return StudentListResponse(students=students, total=len(students))


@router.get("/programs", response_model=ProgramsResponse)
async def list_programs() -> ProgramsResponse:
    """Return the suggested program names."""
    return ProgramsResponse(programs=list(JURUSAN_OPTIONS))


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    repository: DirectoryRepository = Depends(get_directory_repository),
) -> StudentResponse:
    result = await repository.get(student_id)
    if not result.ok:
        raise http_exception_for(result.error)
    return StudentResponse(student=result.value)


@router.post(
    "", response_model=CreateStudentResponse, status_code=status.HTTP_201_CREATED
)
async def create_student(
    request: CreateStudentRequest,
    use_case: CreateStudentUseCase = Depends(get_create_student_use_case),
) -> CreateStudentResponse:
    """Validate and add a student record."""
    result = await use_case.execute(request)
    if not result.ok:
        raise http_exception_for(result.error)
    return CreateStudentResponse(
        message="Data mahasiswa berhasil ditambahkan", id=result.value
    )


@router.patch("/{student_id}", response_model=StudentMessageResponse)
async def update_student(
    student_id: str,
    request: UpdateStudentRequest,
    use_case: UpdateStudentUseCase = Depends(get_update_student_use_case),
) -> StudentMessageResponse:
    """Validate and merge the supplied fields into a student record."""
    result = await use_case.execute(student_id, request)
    if not result.ok:
        raise http_exception_for(result.error)
    return StudentMessageResponse(
        message="Data mahasiswa berhasil diupdate", id=student_id
    )


@router.delete("/{student_id}", response_model=StudentMessageResponse)
async def delete_student(
    student_id: str,
    repository: DirectoryRepository = Depends(get_directory_repository),
) -> StudentMessageResponse:
    """Delete a student record; deleting an unknown id also succeeds."""
    result = await repository.delete(student_id)
    if not result.ok:
        raise http_exception_for(result.error)
    return StudentMessageResponse(message="Data berhasil dihapus", id=student_id)
