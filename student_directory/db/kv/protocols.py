"""Protocol for a persistent string key-value store."""

from collections.abc import Iterable
from typing import Protocol


class KeyValueStore(Protocol):
    """Local persistent storage, atomic per key.

    `multi_remove` is the only multi-key operation and applies all removals
    together. Back-end failures raise `StoreError`.
    """

    async def get_item(self, key: str) -> str | None:
        """Return the value stored under `key`, or None."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...

    async def remove_item(self, key: str) -> None:
        """Remove `key`; a missing key is ignored."""
        ...

    async def multi_remove(self, keys: Iterable[str]) -> None:
        """Remove several keys at once."""
        ...
