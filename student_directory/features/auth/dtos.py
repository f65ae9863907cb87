"""Authentication data transfer objects."""

from pydantic import BaseModel

from student_directory.features.session import RememberedCredential, SessionIdentity


class SignInRequest(BaseModel):
    """Request model for signing in."""

    email: str = ""
    password: str = ""
    remember_me: bool = False


class RegisterRequest(BaseModel):
    """Request model for registering an account."""

    nama: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class SessionResponse(BaseModel):
    """The cached identity, or null when nobody is signed in."""

    identity: SessionIdentity | None


class SignOutResponse(BaseModel):
    message: str


class RememberedCredentialResponse(BaseModel):
    """The remember-me pair used to pre-fill the sign-in form."""

    credential: RememberedCredential
