from __future__ import annotations

import logging

from result import Err, Ok

from dualvfs.config.loader import resolve_storage_root
from dualvfs.config.schema import AppConfig
from dualvfs.models.enums import ChangeKind, StoreKind
from dualvfs.models.stat import FsResult, IoFailure, Stat
from dualvfs.services.fs import DEFAULT_FS, FileSystem
from dualvfs.services.notify import ChangeNotifier
from dualvfs.services.paths import ROOT, is_root, resolve
from dualvfs.store import MemoryStore, PersistentStore, Store

logger = logging.getLogger(__name__)


def _failure(path: str, exc: OSError) -> Err[IoFailure]:
    logger.debug("I/O failure on %s: %s", path, exc)
    return Err(IoFailure(path=path, message=str(exc) or type(exc).__name__))


class Router:
    """Single path-addressed facade over the repository and workspace stores.

    Paths starting with ``workspace`` go to the workspace store, everything
    else to the repository store. ``"."`` fans out to both stores for
    ``read_dir``, ``delete`` and ``all_files_in``. Store calls are awaited
    one after another, never concurrently.
    """

    def __init__(
        self,
        repository: Store,
        workspace: Store,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._repository = repository
        self._workspace = workspace
        self._notifier = notifier

    def store_for(self, path: str) -> Store:
        return self._workspace if resolve(path) is StoreKind.WORKSPACE else self._repository

    async def stat(self, path: str) -> FsResult[Stat | None]:
        try:
            return Ok(await self.store_for(path).stat(path))
        except OSError as exc:
            return _failure(path, exc)

    async def exists(self, path: str) -> FsResult[bool]:
        result = await self.stat(path)
        if isinstance(result, Err):
            return result
        return Ok(result.unwrap() is not None)

    async def read_file(self, path: str) -> FsResult[bytes | None]:
        try:
            return Ok(await self.store_for(path).read_file(path))
        except OSError as exc:
            return _failure(path, exc)

    async def write_file(self, path: str, data: bytes) -> FsResult[None]:
        store = self.store_for(path)
        try:
            existed = await store.stat(path) is not None
            await store.write_file(path, data)
        except OSError as exc:
            return _failure(path, exc)
        self._notify(path, ChangeKind.CHANGE if existed else ChangeKind.CREATE)
        return Ok(None)

    async def create_dir(self, path: str) -> FsResult[None]:
        store = self.store_for(path)
        try:
            existed = await store.stat(path) is not None
            await store.create_dir(path)
        except OSError as exc:
            return _failure(path, exc)
        self._notify(path, ChangeKind.CHANGE if existed else ChangeKind.CREATE)
        return Ok(None)

    async def read_dir(self, path: str) -> FsResult[list[str] | None]:
        try:
            if not is_root(path):
                return Ok(await self.store_for(path).read_dir(path))
            workspace = await self._workspace.read_dir(ROOT)
            repository = await self._repository.read_dir(ROOT)
        except OSError as exc:
            return _failure(path, exc)
        if workspace is None and repository is None:
            return Ok(None)
        return Ok([*(workspace or []), *(repository or [])])

    async def delete(self, path: str) -> FsResult[None]:
        try:
            if is_root(path):
                existed = False
                for store in (self._repository, self._workspace):
                    if await store.stat(ROOT) is not None:
                        existed = True
                    await store.delete(ROOT)
            else:
                store = self.store_for(path)
                existed = await store.stat(path) is not None
                await store.delete(path)
        except OSError as exc:
            return _failure(path, exc)
        if existed:
            self._notify(path, ChangeKind.DELETE)
        return Ok(None)

    async def all_files_in(self, path: str) -> FsResult[list[str]]:
        try:
            if not is_root(path):
                return Ok(await self.store_for(path).all_files_in(path))
            files = await self._repository.all_files_in(ROOT)
            files.extend(await self._workspace.all_files_in(ROOT))
        except OSError as exc:
            return _failure(path, exc)
        return Ok(files)

    def _notify(self, uri: str, kind: ChangeKind) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(uri, kind)
        except Exception as exc:  # noqa: BLE001
            logger.warning("change notifier failed for %s (%s): %s", uri, kind.value, exc)


def build_router(
    config: AppConfig,
    notifier: ChangeNotifier | None = None,
    fs: FileSystem = DEFAULT_FS,
) -> Router:
    """Construct the session router: disk-backed repository, fresh in-memory workspace."""
    root = resolve_storage_root(config, fs)
    if config.create_root and not fs.exists(root):
        logger.info("creating storage root %s", root)
        fs.mkdir(root)
    return Router(PersistentStore(root, fs=fs), MemoryStore(), notifier=notifier)
