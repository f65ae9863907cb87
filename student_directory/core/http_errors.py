"""Translation of failed results into HTTP errors."""

from fastapi import HTTPException, status

from student_directory.core.errors import (
    AuthError,
    FieldValidationError,
    StoreError,
    StoreErrorKind,
)

STORE_ERROR_STATUS: dict[StoreErrorKind, int] = {
    StoreErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    StoreErrorKind.PERMISSION: status.HTTP_403_FORBIDDEN,
    StoreErrorKind.TRANSPORT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def http_exception_for(
    error: Exception, auth_status: int = status.HTTP_401_UNAUTHORIZED
) -> HTTPException:
    """Build the HTTPException matching a failure carried by a Result."""
    if isinstance(error, FieldValidationError):
        return HTTPException(
            status_code=422,
            detail={
                "message": str(error),
                "issues": [
                    {"field": issue.field, "reason": issue.reason}
                    for issue in error.issues
                ],
            },
        )
    if isinstance(error, StoreError):
        return HTTPException(
            status_code=STORE_ERROR_STATUS[error.kind],
            detail={"kind": error.kind.value, "message": error.message},
        )
    if isinstance(error, AuthError):
        return HTTPException(status_code=auth_status, detail=error.message)
    raise error
