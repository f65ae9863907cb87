"""Authentication and session API routes."""

from fastapi import APIRouter, Depends, status

from student_directory.core.container import ServiceContainer
from student_directory.core.dependencies import (
    get_auth_provider,
    get_container,
    get_document_store,
    get_session_cache,
)
from student_directory.core.errors import StoreError
from student_directory.core.http_errors import http_exception_for
from student_directory.db.documents import DocumentStore
from student_directory.features.auth.dtos import (
    RegisterRequest,
    RememberedCredentialResponse,
    SessionResponse,
    SignInRequest,
    SignOutResponse,
)
from student_directory.features.auth.provider import AuthProvider
from student_directory.features.auth.usecases import (
    RegisterUseCaseImpl,
    SignInUseCaseImpl,
    SignOutUseCaseImpl,
)
from student_directory.features.session import SessionCache

router = APIRouter(prefix="/auth", tags=["auth"])


def get_sign_in_use_case(
    provider: AuthProvider = Depends(get_auth_provider),
    session_cache: SessionCache = Depends(get_session_cache),
) -> SignInUseCaseImpl:
    """Dependency injection for the sign-in use case."""
    return SignInUseCaseImpl(provider=provider, session_cache=session_cache)


def get_register_use_case(
    provider: AuthProvider = Depends(get_auth_provider),
    session_cache: SessionCache = Depends(get_session_cache),
    store: DocumentStore = Depends(get_document_store),
    container: ServiceContainer = Depends(get_container),
) -> RegisterUseCaseImpl:
    """Dependency injection for the registration use case."""
    return RegisterUseCaseImpl(
        provider=provider,
        session_cache=session_cache,
        store=store,
        users_collection=container.settings.users_collection,
    )


def get_sign_out_use_case(
    provider: AuthProvider = Depends(get_auth_provider),
    session_cache: SessionCache = Depends(get_session_cache),
    container: ServiceContainer = Depends(get_container),
) -> SignOutUseCaseImpl:
    """Dependency injection for the sign-out use case."""
    return SignOutUseCaseImpl(
        provider=provider,
        session_cache=session_cache,
        keep_remembered_credential=container.settings.keep_remembered_credential_on_sign_out,
    )


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    use_case: SignInUseCaseImpl = Depends(get_sign_in_use_case),
) -> SessionResponse:
    result = await use_case.execute(
        request.email, request.password, remember_me=request.remember_me
    )
    if not result.ok:
        raise http_exception_for(result.error)
    return SessionResponse(identity=result.value)


@router.post(
    "/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterRequest,
    use_case: RegisterUseCaseImpl = Depends(get_register_use_case),
) -> SessionResponse:
    result = await use_case.execute(
        request.nama, request.email, request.password, request.confirm_password
    )
    if not result.ok:
        raise http_exception_for(result.error, auth_status=status.HTTP_400_BAD_REQUEST)
    return SessionResponse(identity=result.value)


@router.post("/sign-out", response_model=SignOutResponse)
async def sign_out(
    use_case: SignOutUseCaseImpl = Depends(get_sign_out_use_case),
) -> SignOutResponse:
    result = await use_case.execute()
    if not result.ok:
        raise http_exception_for(result.error)
    return SignOutResponse(message="Logout berhasil")


@router.get("/session", response_model=SessionResponse)
async def get_session(
    session_cache: SessionCache = Depends(get_session_cache),
) -> SessionResponse:
    """Return the identity cached by the last sign-in."""
    try:
        identity = await session_cache.get_identity()
    except StoreError as e:
        raise http_exception_for(e) from e
    return SessionResponse(identity=identity)


@router.get("/remembered-credential", response_model=RememberedCredentialResponse)
async def get_remembered_credential(
    session_cache: SessionCache = Depends(get_session_cache),
) -> RememberedCredentialResponse:
    try:
        credential = await session_cache.get_remembered_credential()
    except StoreError as e:
        raise http_exception_for(e) from e
    return RememberedCredentialResponse(credential=credential)
