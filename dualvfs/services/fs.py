from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(slots=True, frozen=True)
class HostStat:
    is_file: bool
    size: int
    ctime_ms: float
    mtime_ms: float


class FileSystem(Protocol):
    """Synchronous host primitives the persistent store is built on.

    Every method raises ``OSError`` on failure.
    """

    def expanduser(self, path: str) -> str: ...

    def exists(self, path: str) -> bool: ...

    def lstat(self, path: str) -> HostStat: ...

    def mkdir(self, path: str) -> None: ...

    def write_bytes(self, path: str, data: bytes) -> None: ...

    def read_bytes(self, path: str) -> bytes: ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str: ...

    def listdir(self, path: str) -> list[str]: ...

    def remove(self, path: str) -> None: ...

    def rmdir(self, path: str) -> None: ...


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return str(Path(path).expanduser())

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def lstat(self, path: str) -> HostStat:
        """Stat without following symlinks.

        Creation time is ``st_birthtime`` where the platform reports it. Linux
        does not, so ``st_ctime`` stands in there and moves on every rewrite.
        """
        st = os.lstat(path)
        created = getattr(st, "st_birthtime", st.st_ctime)
        return HostStat(
            is_file=not statmod.S_ISDIR(st.st_mode),
            size=st.st_size,
            ctime_ms=created * 1000,
            mtime_ms=st.st_mtime * 1000,
        )

    def mkdir(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def write_bytes(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return Path(path).read_text(encoding=encoding)

    def listdir(self, path: str) -> list[str]:
        return os.listdir(path)

    def remove(self, path: str) -> None:
        os.remove(path)

    def rmdir(self, path: str) -> None:
        os.rmdir(path)


DEFAULT_FS: FileSystem = OsFileSystem()
