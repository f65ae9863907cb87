"""Protocol definition for student directory data access."""

from typing import Protocol

from student_directory.core.errors import StoreError
from student_directory.core.result import Result
from student_directory.features.students.models import (
    StudentRecord,
    StudentRecordInput,
    StudentRecordUpdate,
)


class DirectoryRepository(Protocol):
    """Protocol for student record CRUD and name-prefix search.

    Every method returns a Result instead of raising, and each call reaches
    the store exactly once; retrying is left to the caller.
    """

    async def create(self, fields: StudentRecordInput) -> Result[str, StoreError]:
        """Create a record and return its store-assigned id."""
        ...

    async def get(self, student_id: str) -> Result[StudentRecord, StoreError]:
        """Fetch a record by id, failing with not_found when missing."""
        ...

    async def update(
        self, student_id: str, fields: StudentRecordUpdate
    ) -> Result[None, StoreError]:
        """Merge the supplied fields into an existing record."""
        ...

    async def delete(self, student_id: str) -> Result[None, StoreError]:
        """Delete a record. Deleting a missing id succeeds."""
        ...

    async def list_all(self) -> Result[list[StudentRecord], StoreError]:
        """List every record, newest first."""
        ...

    async def search_by_name_prefix(
        self, prefix: str
    ) -> Result[list[StudentRecord], StoreError]:
        """List records whose name starts with `prefix`, ascending by name."""
        ...
