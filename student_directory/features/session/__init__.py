"""Local session cache feature."""

from .cache import (
    OWNED_KEYS,
    REMEMBER_EMAIL_KEY,
    REMEMBER_PASSWORD_KEY,
    USER_DATA_KEY,
    SessionCache,
)
from .models import RememberedCredential, SessionIdentity

__all__ = [
    "SessionCache",
    "SessionIdentity",
    "RememberedCredential",
    "USER_DATA_KEY",
    "REMEMBER_EMAIL_KEY",
    "REMEMBER_PASSWORD_KEY",
    "OWNED_KEYS",
]
