from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, override

from dualvfs.models.enums import StatKind
from dualvfs.models.stat import Stat
from dualvfs.services.paths import ROOT, SEP, parent
from dualvfs.store._base import StoreBase


@dataclass(slots=True)
class _Entry:
    kind: StatKind
    data: bytes
    created_at: int
    modified_at: int


class MemoryStore(StoreBase):
    """In-process store. The root exists only while it holds entries."""

    _offload = False

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.RLock()
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def _children(self, path: str) -> list[str]:
        if path == ROOT:
            return [key for key in self._entries if SEP not in key]
        prefix = path + SEP
        return [
            key[len(prefix) :]
            for key in self._entries
            if key.startswith(prefix) and SEP not in key[len(prefix) :]
        ]

    def _in_subtree(self, key: str, path: str) -> bool:
        return path == ROOT or key == path or key.startswith(path + SEP)

    def _make_dirs(self, path: str) -> None:
        if path == ROOT:
            return
        parts = path.split(SEP)
        for idx in range(1, len(parts) + 1):
            key = SEP.join(parts[:idx])
            entry = self._entries.get(key)
            if entry is None:
                now = self._now()
                self._entries[key] = _Entry(StatKind.DIRECTORY, b"", now, now)
            elif entry.kind is StatKind.FILE:
                raise NotADirectoryError(f"Not a directory: '{key}'")

    @override
    def _kind(self, path: str) -> StatKind | None:
        with self._lock:
            if path == ROOT:
                return StatKind.DIRECTORY if self._entries else None
            entry = self._entries.get(path)
            return entry.kind if entry is not None else None

    @override
    def _stat(self, path: str) -> Stat | None:
        with self._lock:
            if path == ROOT:
                if not self._entries:
                    return None
                return Stat(
                    kind=StatKind.DIRECTORY,
                    size=len(self._children(ROOT)),
                    created_at=min(e.created_at for e in self._entries.values()),
                    modified_at=max(e.modified_at for e in self._entries.values()),
                )
            entry = self._entries.get(path)
            if entry is None:
                return None
            size = len(entry.data) if entry.kind is StatKind.FILE else len(self._children(path))
            return Stat(
                kind=entry.kind,
                size=size,
                created_at=entry.created_at,
                modified_at=entry.modified_at,
            )

    @override
    def _read_file(self, path: str) -> bytes | None:
        with self._lock:
            entry = self._entries.get(path)
            if entry is None:
                if path == ROOT and self._entries:
                    raise IsADirectoryError(f"Is a directory: '{path}'")
                return None
            if entry.kind is StatKind.DIRECTORY:
                raise IsADirectoryError(f"Is a directory: '{path}'")
            return entry.data

    @override
    def _write_file(self, path: str, data: bytes) -> None:
        with self._lock:
            entry = self._entries.get(path)
            if path == ROOT or (entry is not None and entry.kind is StatKind.DIRECTORY):
                raise IsADirectoryError(f"Is a directory: '{path}'")
            self._make_dirs(parent(path))
            now = self._now()
            if entry is None:
                self._entries[path] = _Entry(StatKind.FILE, bytes(data), now, now)
            else:
                entry.data = bytes(data)
                entry.modified_at = now

    @override
    def _create_dir(self, path: str) -> None:
        with self._lock:
            if path in self._entries:
                return
            self._make_dirs(path)

    @override
    def _read_dir(self, path: str) -> list[str] | None:
        with self._lock:
            if path != ROOT:
                entry = self._entries.get(path)
                if entry is None:
                    return None
                if entry.kind is StatKind.FILE:
                    raise NotADirectoryError(f"Not a directory: '{path}'")
            elif not self._entries:
                return None
            return self._children(path)

    @override
    def _remove(self, path: str, kind: StatKind) -> None:
        with self._lock:
            self._entries.pop(path, None)

    @override
    def _delete_tree(self, path: str) -> None:
        with self._lock:
            doomed = [key for key in self._entries if self._in_subtree(key, path)]
            for key in doomed:
                del self._entries[key]

    @override
    def _collect_files(self, path: str) -> list[str]:
        with self._lock:
            return [
                key
                for key, entry in self._entries.items()
                if entry.kind is StatKind.FILE and self._in_subtree(key, path)
            ]
