"""Protocol for the external authentication provider."""

from typing import Protocol

from pydantic import BaseModel


class AuthIdentity(BaseModel):
    """Identity issued by the provider on sign-in or registration."""

    uid: str
    email: str
    display_name: str | None = None


class AuthProviderError(Exception):
    """Raised by a provider with its own error code, e.g. `auth/wrong-password`."""

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        super().__init__(message or code)


class AuthProvider(Protocol):
    """Protocol for the authentication capability consumed by the core."""

    async def sign_in(self, email: str, password: str) -> AuthIdentity:
        """Authenticate with email and password."""
        ...

    async def register(
        self, email: str, password: str, display_name: str | None = None
    ) -> AuthIdentity:
        """Create an account and return its identity."""
        ...

    async def sign_out(self) -> None:
        """End the provider-side session."""
        ...
