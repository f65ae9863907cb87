"""Use case for editing a student record."""

from student_directory.core.errors import FieldValidationError, StoreError
from student_directory.core.result import Result
from student_directory.core.validation import ensure_valid, validate_student_update
from student_directory.features.students.models import StudentRecordUpdate
from student_directory.features.students.repositories import DirectoryRepository


class UpdateStudentUseCaseImpl:
    """Implementation of the update student use case."""

    def __init__(self, repository: DirectoryRepository):
        self.repository = repository

    async def execute(
        self, student_id: str, fields: StudentRecordUpdate
    ) -> Result[None, FieldValidationError | StoreError]:
        """Validate the supplied fields and merge them into the record.

        Only fields present in the update are checked, but a present required
        field that is blank or null still blocks the write.
        """
        try:
            ensure_valid(validate_student_update(fields.to_fields()))
        except FieldValidationError as e:
            return Result.failure(e)

        return await self.repository.update(student_id, fields)
