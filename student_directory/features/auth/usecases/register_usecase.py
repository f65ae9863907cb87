"""Use case for registering a new account."""

import logging

from student_directory.core.errors import AuthError, FieldValidationError, StoreError
from student_directory.core.result import Result
from student_directory.core.validation import ensure_valid, validate_registration
from student_directory.db.documents import SERVER_TIMESTAMP, DocumentStore
from student_directory.features.auth.messages import AuthFlow, auth_error_for
from student_directory.features.auth.provider import AuthProvider, AuthProviderError
from student_directory.features.session import SessionCache, SessionIdentity

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class RegisterUseCaseImpl:
    """Implementation of the registration use case."""

    def __init__(
        self,
        provider: AuthProvider,
        session_cache: SessionCache,
        store: DocumentStore,
        users_collection: str = "users",
    ):
        """Initialize the use case with dependencies.

        Args:
            provider: External authentication provider
            session_cache: Local cache receiving the new identity
            store: Document store receiving the user profile
            users_collection: Collection holding user profiles
        """
        self.provider = provider
        self.session_cache = session_cache
        self.store = store
        self.users_collection = users_collection

    async def execute(
        self, nama: str, email: str, password: str, confirm_password: str
    ) -> Result[SessionIdentity, FieldValidationError | AuthError | StoreError]:
        """Create the account, write its profile, then cache the identity.

        The profile is written before the cache so a failed profile write
        leaves the cache as it was.
        """
        try:
            ensure_valid(validate_registration(nama, email, password, confirm_password))
        except FieldValidationError as e:
            return Result.failure(e)

        try:
            identity = await self.provider.register(email, password, display_name=nama)
        except AuthProviderError as e:
            logger.info("Registration rejected by provider: %s", e.code)
            return Result.failure(auth_error_for(e.code, AuthFlow.REGISTER))

        try:
            await self.store.set(
                self.users_collection,
                identity.uid,
                {
                    "nama": nama,
                    "email": email,
                    "createdAt": SERVER_TIMESTAMP,
                    "updatedAt": SERVER_TIMESTAMP,
                    "role": DEFAULT_ROLE,
                },
            )
            session = SessionIdentity(uid=identity.uid, email=email, display_name=nama)
            await self.session_cache.set_identity(session)
        except StoreError as e:
            logger.warning("Could not finish registration for %s: %s", identity.uid, e)
            return Result.failure(e)

        logger.info("Registered user %s", identity.uid)
        return Result.success(session)
