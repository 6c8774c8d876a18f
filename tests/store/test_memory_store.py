from __future__ import annotations

import pytest

from dualvfs.store import MemoryStore


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.anyio
async def test_round_trip_with_redundant_separators() -> None:
    store = MemoryStore()
    await store.write_file("a/b/c.txt", b"hello")

    assert await store.read_file("a/b/c.txt") == b"hello"
    assert await store.read_file("a//b/c.txt") == b"hello"
    assert await store.read_file("./a/b/c.txt") == b"hello"


@pytest.mark.anyio
async def test_empty_file_round_trip() -> None:
    store = MemoryStore()
    await store.write_file("empty.bin", b"")

    assert await store.read_file("empty.bin") == b""
    stat = await store.stat("empty.bin")
    assert stat is not None and stat.is_file and stat.size == 0


@pytest.mark.anyio
async def test_missing_entries_are_none() -> None:
    store = MemoryStore()

    assert await store.stat("nope") is None
    assert await store.read_file("nope") is None
    assert await store.read_dir("nope") is None
    assert await store.all_files_in("nope") == []


@pytest.mark.anyio
async def test_root_absent_until_written() -> None:
    store = MemoryStore()
    assert await store.read_dir(".") is None
    assert await store.stat(".") is None

    await store.write_file("workspace/n.txt", b"x")

    assert await store.read_dir(".") == ["workspace"]
    root = await store.stat(".")
    assert root is not None and root.is_dir and root.size == 1


@pytest.mark.anyio
async def test_create_dir_is_idempotent() -> None:
    store = MemoryStore()
    await store.create_dir("x/y")
    first = await store.read_dir("x")
    await store.create_dir("x/y")

    assert await store.read_dir("x") == first == ["y"]
    assert await store.read_dir("x/y") == []


@pytest.mark.anyio
async def test_directory_size_matches_listing() -> None:
    store = MemoryStore()
    await store.create_dir("x")
    await store.write_file("x/a.txt", b"hi")
    await store.write_file("x/y/b.txt", b"yo")

    stat = await store.stat("x")
    listing = await store.read_dir("x")
    assert stat is not None and stat.is_dir
    assert listing is not None
    assert stat.size == len(listing) == 2
    assert sorted(await store.all_files_in("x")) == ["x/a.txt", "x/y/b.txt"]


@pytest.mark.anyio
async def test_delete_removes_subtree_only() -> None:
    store = MemoryStore()
    await store.write_file("d/src/a.txt", b"a")
    await store.write_file("d/src/deep/b.txt", b"b")
    await store.write_file("d/srcfile.txt", b"c")

    await store.delete("d/src")

    assert await store.stat("d/src") is None
    assert await store.stat("d/src/a.txt") is None
    assert await store.stat("d/src/deep/b.txt") is None
    assert await store.read_file("d/srcfile.txt") == b"c"

    await store.delete("d/src")
    assert await store.read_dir("d") == ["srcfile.txt"]


@pytest.mark.anyio
async def test_delete_root_clears_store() -> None:
    store = MemoryStore()
    await store.write_file("a.txt", b"a")
    await store.write_file("b/c.txt", b"c")

    await store.delete(".")

    assert await store.read_dir(".") is None
    assert await store.all_files_in(".") == []


@pytest.mark.anyio
async def test_rewrite_advances_modified_and_keeps_created() -> None:
    clock = _Clock(1_000.0)
    store = MemoryStore(clock=clock)
    await store.write_file("f.txt", b"one")
    before = await store.stat("f.txt")

    clock.now = 1_002.5
    await store.write_file("f.txt", b"two!")
    after = await store.stat("f.txt")

    assert before is not None and after is not None
    assert after.modified_at > before.modified_at
    assert after.created_at == before.created_at == 1_000
    assert after.size == 4


@pytest.mark.anyio
async def test_type_conflicts_raise_os_errors() -> None:
    store = MemoryStore()
    await store.write_file("f.txt", b"x")
    await store.create_dir("d")

    with pytest.raises(NotADirectoryError):
        await store.write_file("f.txt/child.txt", b"y")
    with pytest.raises(IsADirectoryError):
        await store.write_file("d", b"y")
    with pytest.raises(IsADirectoryError):
        await store.read_file("d")
    with pytest.raises(NotADirectoryError):
        await store.read_dir("f.txt")


@pytest.mark.anyio
async def test_all_files_in_on_a_file() -> None:
    store = MemoryStore()
    await store.write_file("dir12/hello1.txt", b"hello")

    assert await store.all_files_in("dir12/hello1.txt") == ["dir12/hello1.txt"]
