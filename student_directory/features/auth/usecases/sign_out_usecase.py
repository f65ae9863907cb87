"""Use case for signing out."""

import logging

from student_directory.core.errors import AuthError, StoreError
from student_directory.core.result import Result
from student_directory.features.auth.messages import AuthFlow, auth_error_for
from student_directory.features.auth.provider import AuthProvider, AuthProviderError
from student_directory.features.session import SessionCache

logger = logging.getLogger(__name__)


class SignOutUseCaseImpl:
    """Implementation of the sign-out use case.

    By default the whole cache is wiped, remember-me pair included.
    With `keep_remembered_credential` only the identity is dropped.
    """

    def __init__(
        self,
        provider: AuthProvider,
        session_cache: SessionCache,
        keep_remembered_credential: bool = False,
    ):
        self.provider = provider
        self.session_cache = session_cache
        self.keep_remembered_credential = keep_remembered_credential

    async def execute(self) -> Result[None, AuthError | StoreError]:
        try:
            await self.provider.sign_out()
        except AuthProviderError as e:
            logger.warning("Sign-out rejected by provider: %s", e.code)
            return Result.failure(auth_error_for(e.code, AuthFlow.SIGN_OUT))

        try:
            if self.keep_remembered_credential:
                await self.session_cache.clear_identity()
            else:
                await self.session_cache.clear_all()
        except StoreError as e:
            logger.warning("Could not clear session cache: %s", e)
            return Result.failure(e)

        return Result.success()
