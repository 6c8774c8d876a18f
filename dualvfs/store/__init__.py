from __future__ import annotations

from typing import Protocol

from dualvfs.models.stat import Stat
from dualvfs.store._base import StoreBase
from dualvfs.store.memory import MemoryStore
from dualvfs.store.persistent import PersistentStore


class Store(Protocol):
    async def stat(self, path: str) -> Stat | None: ...

    async def read_file(self, path: str) -> bytes | None: ...

    async def write_file(self, path: str, data: bytes) -> None: ...

    async def create_dir(self, path: str) -> None: ...

    async def read_dir(self, path: str) -> list[str] | None: ...

    async def delete(self, path: str) -> None: ...

    async def all_files_in(self, path: str) -> list[str]: ...


__all__ = [
    "MemoryStore",
    "PersistentStore",
    "Store",
    "StoreBase",
]
