"""Locally cached session models."""

from pydantic import BaseModel, ConfigDict, Field


class SessionIdentity(BaseModel):
    """Snapshot of the signed-in user, stored as JSON under `user_data`."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str
    email: str
    display_name: str | None = Field(default=None, alias="displayName")


class RememberedCredential(BaseModel):
    """The remember-me pair. Either half may be missing."""

    email: str | None = None
    password: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.email is not None and self.password is not None
