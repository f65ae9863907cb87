"""Document store implementation of the DirectoryRepository protocol."""

import logging

from typing_extensions import override

from student_directory.core.errors import StoreError
from student_directory.core.result import Result
from student_directory.db.documents import SERVER_TIMESTAMP, DocumentStore
from student_directory.features.students.models import (
    CREATED_AT_FIELD,
    UPDATED_AT_FIELD,
    StudentRecord,
    StudentRecordInput,
    StudentRecordUpdate,
)
from student_directory.features.students.repositories.protocols import (
    DirectoryRepository,
)

logger = logging.getLogger(__name__)

NAME_FIELD = "nama"


class DocumentDirectoryRepository(DirectoryRepository):
    """Stateless façade over the `students` collection of a document store.

    The repository never validates input and never retries; validation is the
    caller's job and a failed call is reported once, as a StoreError result.
    """

    def __init__(self, store: DocumentStore, collection_name: str = "students"):
        """Initialize the repository.

        Args:
            store: The document store holding student records.
            collection_name: Collection the records live in (default: students).
        """
        self.store: DocumentStore = store
        self.collection_name: str = collection_name

    def _failure(self, operation: str, error: StoreError, student_id: str | None = None):
        logger.warning(
            "Student %s failed (%s)%s: %s",
            operation,
            error.kind.value,
            f" for id {student_id}" if student_id else "",
            error.message or "no details",
        )
        return Result.failure(error)

    @override
    async def create(self, fields: StudentRecordInput) -> Result[str, StoreError]:
        data = {
            **fields.to_fields(),
            CREATED_AT_FIELD: SERVER_TIMESTAMP,
            UPDATED_AT_FIELD: SERVER_TIMESTAMP,
        }
        try:
            student_id = await self.store.add(self.collection_name, data)
        except StoreError as e:
            return self._failure("create", e)
        logger.info("Created student %s", student_id)
        return Result.success(student_id)

    @override
    async def get(self, student_id: str) -> Result[StudentRecord, StoreError]:
        try:
            snapshot = await self.store.get(self.collection_name, student_id)
        except StoreError as e:
            return self._failure("get", e, student_id)
        if snapshot is None:
            return Result.failure(StoreError.not_found(self.collection_name, student_id))
        return Result.success(StudentRecord.from_document(snapshot["id"], snapshot["data"]))

    @override
    async def update(
        self, student_id: str, fields: StudentRecordUpdate
    ) -> Result[None, StoreError]:
        # createdAt and id are never part of the payload, so they cannot change.
        data = {**fields.to_fields(), UPDATED_AT_FIELD: SERVER_TIMESTAMP}
        try:
            await self.store.update(self.collection_name, student_id, data)
        except StoreError as e:
            return self._failure("update", e, student_id)
        logger.info("Updated student %s (%s)", student_id, ", ".join(sorted(data)))
        return Result.success()

    @override
    async def delete(self, student_id: str) -> Result[None, StoreError]:
        try:
            await self.store.delete(self.collection_name, student_id)
        except StoreError as e:
            return self._failure("delete", e, student_id)
        logger.info("Deleted student %s", student_id)
        return Result.success()

    @override
    async def list_all(self) -> Result[list[StudentRecord], StoreError]:
        try:
            snapshots = await self.store.query(
                self.collection_name, order_by=CREATED_AT_FIELD, descending=True
            )
        except StoreError as e:
            return self._failure("list", e)
        return Result.success(
            [StudentRecord.from_document(s["id"], s["data"]) for s in snapshots]
        )

    @override
    async def search_by_name_prefix(
        self, prefix: str
    ) -> Result[list[StudentRecord], StoreError]:
        # Half-open range [prefix, prefix + sentinel): case-sensitive, prefix only.
        try:
            snapshots = await self.store.query(
                self.collection_name,
                order_by=NAME_FIELD,
                start_at=prefix,
                end_before=prefix + self.store.range_sentinel,
            )
        except StoreError as e:
            return self._failure("search", e)
        return Result.success(
            [StudentRecord.from_document(s["id"], s["data"]) for s in snapshots]
        )
