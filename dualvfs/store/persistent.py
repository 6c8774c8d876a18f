from __future__ import annotations

import logging
from typing import override

from dualvfs.models.enums import StatKind
from dualvfs.models.stat import Stat, ms_to_seconds
from dualvfs.services.fs import DEFAULT_FS, FileSystem
from dualvfs.services.paths import ROOT, SEP, normalize, parent
from dualvfs.store._base import StoreBase

logger = logging.getLogger(__name__)


class PersistentStore(StoreBase):
    """Store rooted at a directory of the host filesystem."""

    def __init__(self, root: str, fs: FileSystem = DEFAULT_FS) -> None:
        self.root = root.rstrip(SEP) or SEP
        self._fs = fs

    def _under_root(self, path: str) -> bool:
        return path == self.root or path.startswith(self.root + SEP)

    def path_for(self, logical: str) -> str:
        """Map a logical path to its physical location under the store root."""
        relative = self._relative(logical)
        if relative == ROOT:
            return self.root
        return f"{self.root}{SEP}{relative}"

    @override
    def _relative(self, path: str) -> str:
        if self._under_root(path):
            path = path[len(self.root) :]
        return normalize(path)

    @override
    def _kind(self, path: str) -> StatKind | None:
        physical = self.path_for(path)
        if not self._fs.exists(physical):
            return None
        return StatKind.FILE if self._fs.lstat(physical).is_file else StatKind.DIRECTORY

    @override
    def _stat(self, path: str) -> Stat | None:
        physical = self.path_for(path)
        if not self._fs.exists(physical):
            return None
        raw = self._fs.lstat(physical)
        if raw.is_file:
            kind, size = StatKind.FILE, raw.size
        else:
            kind, size = StatKind.DIRECTORY, len(self._read_dir(path) or [])
        return Stat(
            kind=kind,
            size=size,
            created_at=ms_to_seconds(raw.ctime_ms),
            modified_at=ms_to_seconds(raw.mtime_ms),
        )

    @override
    def _read_file(self, path: str) -> bytes | None:
        physical = self.path_for(path)
        if not self._fs.exists(physical):
            return None
        return self._fs.read_bytes(physical)

    @override
    def _write_file(self, path: str, data: bytes) -> None:
        self._create_dir(parent(path))
        self._fs.write_bytes(self.path_for(path), data)

    @override
    def _create_dir(self, path: str) -> None:
        physical = self.path_for(path)
        if self._fs.exists(physical):
            return
        try:
            self._fs.mkdir(physical)
        except FileExistsError:
            logger.debug("directory appeared concurrently: %s", physical)

    @override
    def _read_dir(self, path: str) -> list[str] | None:
        physical = self.path_for(path)
        if not self._fs.exists(physical):
            return None
        return self._fs.listdir(physical)

    @override
    def _remove(self, path: str, kind: StatKind) -> None:
        physical = self.path_for(path)
        if kind is StatKind.FILE:
            self._fs.remove(physical)
        else:
            self._fs.rmdir(physical)
