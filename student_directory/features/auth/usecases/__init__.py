"""Authentication use cases."""

from .register_usecase import RegisterUseCaseImpl
from .sign_in_usecase import SignInUseCaseImpl
from .sign_out_usecase import SignOutUseCaseImpl

__all__ = [
    "SignInUseCaseImpl",
    "RegisterUseCaseImpl",
    "SignOutUseCaseImpl",
]
