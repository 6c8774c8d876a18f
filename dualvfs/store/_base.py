from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, TypeVar

from dualvfs.models.enums import StatKind
from dualvfs.models.stat import Stat
from dualvfs.services.paths import join, normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreBase(ABC):
    """Async store contract on top of synchronous primitives.

    Subclasses implement the ``_``-prefixed primitives over store-relative
    paths (already normalized, ``"."`` is the root). Each public coroutine is
    a single blocking boundary: when ``_offload`` is set the whole primitive,
    recursive walks included, runs in one worker thread.
    """

    _offload: bool = True

    @abstractmethod
    def _kind(self, path: str) -> StatKind | None:
        """Return the entry type at *path*, or ``None`` when it does not exist."""

    @abstractmethod
    def _stat(self, path: str) -> Stat | None: ...

    @abstractmethod
    def _read_file(self, path: str) -> bytes | None: ...

    @abstractmethod
    def _write_file(self, path: str, data: bytes) -> None: ...

    @abstractmethod
    def _create_dir(self, path: str) -> None: ...

    @abstractmethod
    def _read_dir(self, path: str) -> list[str] | None: ...

    @abstractmethod
    def _remove(self, path: str, kind: StatKind) -> None:
        """Remove a single file or an already-empty directory."""

    def _relative(self, path: str) -> str:
        return normalize(path)

    def _delete_tree(self, path: str) -> None:
        stack: list[tuple[str, bool]] = [(path, False)]
        while stack:
            current, expanded = stack.pop()
            kind = self._kind(current)
            if kind is None:
                continue
            if kind is StatKind.FILE or expanded:
                self._remove(current, kind)
                continue
            stack.append((current, True))
            for name in self._read_dir(current) or []:
                stack.append((join(current, name), False))

    def _collect_files(self, path: str) -> list[str]:
        files: list[str] = []
        stack = [path]
        while stack:
            current = stack.pop()
            kind = self._kind(current)
            if kind is None:
                continue
            if kind is StatKind.FILE:
                files.append(current)
                continue
            for name in reversed(self._read_dir(current) or []):
                stack.append(join(current, name))
        return files

    async def _run(self, func: Callable[..., T], *args: object) -> T:
        if self._offload:
            return await asyncio.to_thread(func, *args)
        return func(*args)

    async def stat(self, path: str) -> Stat | None:
        return await self._run(self._stat, self._relative(path))

    async def read_file(self, path: str) -> bytes | None:
        return await self._run(self._read_file, self._relative(path))

    async def write_file(self, path: str, data: bytes) -> None:
        rel = self._relative(path)
        logger.debug("%s: write %s (%d bytes)", type(self).__name__, rel, len(data))
        await self._run(self._write_file, rel, data)

    async def create_dir(self, path: str) -> None:
        rel = self._relative(path)
        logger.debug("%s: create_dir %s", type(self).__name__, rel)
        await self._run(self._create_dir, rel)

    async def read_dir(self, path: str) -> list[str] | None:
        return await self._run(self._read_dir, self._relative(path))

    async def delete(self, path: str) -> None:
        rel = self._relative(path)
        logger.debug("%s: delete %s", type(self).__name__, rel)
        await self._run(self._delete_tree, rel)

    async def all_files_in(self, path: str) -> list[str]:
        return await self._run(self._collect_files, self._relative(path))
