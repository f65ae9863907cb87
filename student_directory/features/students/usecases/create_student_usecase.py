"""Use case for adding a student record."""

from student_directory.core.errors import FieldValidationError, StoreError
from student_directory.core.result import Result
from student_directory.core.validation import ensure_valid, validate_student_input
from student_directory.features.students.models import StudentRecordInput
from student_directory.features.students.repositories import DirectoryRepository


class CreateStudentUseCaseImpl:
    """Implementation of the create student use case."""

    def __init__(self, repository: DirectoryRepository):
        """Initialize the use case with dependencies.

        Args:
            repository: Repository for student records
        """
        self.repository = repository

    async def execute(
        self, fields: StudentRecordInput
    ) -> Result[str, FieldValidationError | StoreError]:
        """Validate the record and store it.

        Args:
            fields: The new record's writable fields

        Returns:
            The new record id, or the validation/store failure. A record that
            fails validation never reaches the repository.
        """
        try:
            ensure_valid(validate_student_input(fields.to_fields()))
        except FieldValidationError as e:
            return Result.failure(e)

        return await self.repository.create(fields)
