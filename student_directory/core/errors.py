"""Error kinds shared by the directory, the session cache and authentication.

Validation, store and authentication failures are kept as separate types so
callers can tell a bad form apart from an unreachable store or a rejected
sign-in.
"""

import enum
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """A single failed field rule."""

    field: str
    reason: str


class FieldValidationError(ValueError):
    """Raised locally when input fails validation, before any remote call."""

    def __init__(self, issues: list[FieldIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(issue.reason for issue in self.issues))

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class StoreErrorKind(str, enum.Enum):
    """Failure categories of the remote document store."""

    TRANSPORT = "transport"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"


class StoreError(Exception):
    """Raised or returned when a document store call fails."""

    def __init__(self, kind: StoreErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message
        super().__init__(message or kind.value)

    @classmethod
    def not_found(cls, collection: str, doc_id: str) -> "StoreError":
        return cls(StoreErrorKind.NOT_FOUND, f"Document '{collection}/{doc_id}' not found")

    @classmethod
    def transport(cls, message: str | None = None) -> "StoreError":
        return cls(StoreErrorKind.TRANSPORT, message)

    @classmethod
    def permission(cls, message: str | None = None) -> "StoreError":
        return cls(StoreErrorKind.PERMISSION, message)


class AuthError(Exception):
    """An authentication failure translated to a user-facing message.

    `code` keeps the provider code for logging; `message` never contains it.
    """

    def __init__(self, code: str | None, message: str):
        self.code = code
        self.message = message
        super().__init__(message)
