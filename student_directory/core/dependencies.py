"""FastAPI dependencies resolving shared services from the app state."""

from fastapi import Depends, HTTPException, Request, status

from student_directory.core.container import ServiceContainer
from student_directory.db.documents import DocumentStore
from student_directory.features.auth.provider import AuthProvider
from student_directory.features.session import SessionCache
from student_directory.features.students.repositories import DirectoryRepository


def get_container(request: Request) -> ServiceContainer:
    container: ServiceContainer | None = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return container


def get_directory_repository(
    container: ServiceContainer = Depends(get_container),
) -> DirectoryRepository:
    return container.directory_repository


def get_document_store(
    container: ServiceContainer = Depends(get_container),
) -> DocumentStore:
    return container.document_store


def get_session_cache(
    container: ServiceContainer = Depends(get_container),
) -> SessionCache:
    return container.session_cache


def get_auth_provider(
    container: ServiceContainer = Depends(get_container),
) -> AuthProvider:
    """Return the configured auth provider, or 503 when none is wired in."""
    if container.auth_provider is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication provider is not configured",
        )
    return container.auth_provider
