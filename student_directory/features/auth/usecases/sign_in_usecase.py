"""Use case for signing in with email and password."""

import logging

from student_directory.core.errors import AuthError, FieldValidationError, StoreError
from student_directory.core.result import Result
from student_directory.core.validation import ensure_valid, validate_sign_in
from student_directory.features.auth.messages import AuthFlow, auth_error_for
from student_directory.features.auth.provider import AuthProvider, AuthProviderError
from student_directory.features.session import SessionCache, SessionIdentity

logger = logging.getLogger(__name__)

# Cached when the provider has no display name for the account.
DEFAULT_DISPLAY_NAME = "User"


class SignInUseCaseImpl:
    """Implementation of the sign-in use case."""

    def __init__(self, provider: AuthProvider, session_cache: SessionCache):
        """Initialize the use case with dependencies.

        Args:
            provider: External authentication provider
            session_cache: Local cache receiving the signed-in identity
        """
        self.provider = provider
        self.session_cache = session_cache

    async def execute(
        self, email: str, password: str, remember_me: bool = False
    ) -> Result[SessionIdentity, FieldValidationError | AuthError | StoreError]:
        """Authenticate and cache the resulting identity.

        Args:
            email: User's email address
            password: User's password
            remember_me: Also store the email/password pair for the next sign-in

        Returns:
            The cached identity, or the failure. The cache is left untouched
            when validation or the provider fails. A remember-me pair that
            cannot be written is dropped and the sign-in still succeeds.
        """
        try:
            ensure_valid(validate_sign_in(email, password))
        except FieldValidationError as e:
            return Result.failure(e)

        try:
            identity = await self.provider.sign_in(email, password)
        except AuthProviderError as e:
            logger.info("Sign-in rejected by provider: %s", e.code)
            return Result.failure(auth_error_for(e.code, AuthFlow.SIGN_IN))

        session = SessionIdentity(
            uid=identity.uid,
            email=identity.email,
            display_name=identity.display_name or DEFAULT_DISPLAY_NAME,
        )
        try:
            await self.session_cache.set_identity(session)
        except StoreError as e:
            logger.warning("Could not cache session for %s: %s", identity.uid, e)
            return Result.failure(e)

        if remember_me:
            try:
                await self._remember(email, password)
            except StoreError as e:
                logger.warning("Could not drop half-written credential: %s", e)
                return Result.failure(e)

        return Result.success(session)

    async def _remember(self, email: str, password: str) -> None:
        """Store the remember-me pair, or leave no half of it behind.

        The sign-in itself has already succeeded, so a failed pair write is
        logged rather than reported.
        """
        try:
            await self.session_cache.set_remembered_credential(email, password)
        except StoreError as e:
            logger.warning("Could not remember credential, dropping it: %s", e)
            await self.session_cache.clear_remembered_credential()
