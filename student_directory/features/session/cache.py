"""Local session and remember-me cache.

The cache is the only component touching its storage keys. The credential
pair is written as two separate keys; an interrupted write can leave one half
behind, and reads return whatever half exists.
"""

import logging

from pydantic import ValidationError

from student_directory.db.kv import KeyValueStore
from student_directory.features.session.models import (
    RememberedCredential,
    SessionIdentity,
)

logger = logging.getLogger(__name__)

USER_DATA_KEY = "user_data"
REMEMBER_EMAIL_KEY = "remember_email"
REMEMBER_PASSWORD_KEY = "remember_password"

OWNED_KEYS: tuple[str, ...] = (
    USER_DATA_KEY,
    REMEMBER_EMAIL_KEY,
    REMEMBER_PASSWORD_KEY,
)


class SessionCache:
    """Persists the signed-in identity and the optional remember-me pair."""

    def __init__(self, storage: KeyValueStore):
        """Initialize the cache.

        Args:
            storage: Key-value store the cache keys live in.
        """
        self.storage: KeyValueStore = storage

    async def set_identity(self, identity: SessionIdentity) -> None:
        await self.storage.set_item(
            USER_DATA_KEY, identity.model_dump_json(by_alias=True)
        )

    async def get_identity(self) -> SessionIdentity | None:
        raw = await self.storage.get_item(USER_DATA_KEY)
        if raw is None:
            return None
        try:
            return SessionIdentity.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed cached identity: %s", e)
            return None

    async def clear_identity(self) -> None:
        """Remove the signed-in identity, keeping the remember-me pair."""
        await self.storage.remove_item(USER_DATA_KEY)

    async def set_remembered_credential(self, email: str, password: str) -> None:
        # Two single-key writes, no atomicity across them.
        await self.storage.set_item(REMEMBER_EMAIL_KEY, email)
        await self.storage.set_item(REMEMBER_PASSWORD_KEY, password)

    async def get_remembered_credential(self) -> RememberedCredential:
        email = await self.storage.get_item(REMEMBER_EMAIL_KEY)
        password = await self.storage.get_item(REMEMBER_PASSWORD_KEY)
        if (email is None) != (password is None):
            logger.info("Remembered credential is incomplete")
        return RememberedCredential(email=email, password=password)

    async def clear_remembered_credential(self) -> None:
        """Remove both halves of the remember-me pair together."""
        await self.storage.multi_remove((REMEMBER_EMAIL_KEY, REMEMBER_PASSWORD_KEY))

    async def clear_all(self) -> None:
        """Erase every key the cache owns, remember-me pair included."""
        await self.storage.multi_remove(OWNED_KEYS)
