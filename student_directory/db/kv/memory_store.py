"""In-process implementation of the KeyValueStore protocol."""

from collections.abc import Iterable

from typing_extensions import override

from student_directory.db.kv.protocols import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed key-value store; contents die with the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    @override
    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    @override
    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    @override
    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    @override
    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)
