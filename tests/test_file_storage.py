import asyncio

import pytest

from localdrop.errors import PayloadTooLargeError, StorageError
from localdrop.services.file_storage import BlobStore, make_storage_key, sanitize_name
from tests.fixtures.readers import AsyncReader, ZeroReader


@pytest.mark.parametrize(
    "display_name, expected",
    [
        ("a.png", "a.png"),
        ("my report (final).pdf", "my_report_final_.pdf"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\bob\\notes.txt", "notes.txt"),
        (".bashrc", "bashrc"),
        ("..", "file"),
        ("", "file"),
    ],
)
def test_sanitize_name(display_name, expected):
    assert sanitize_name(display_name) == expected


def test_sanitize_name_truncates_but_keeps_extension():
    name = sanitize_name("x" * 300 + ".tar")
    assert len(name) == 200
    assert name.endswith(".tar")


def test_storage_keys_are_unique_for_same_name():
    keys = {make_storage_key("a.png") for _ in range(100)}
    assert len(keys) == 100
    assert all(key.endswith("_a.png") and "/" not in key for key in keys)


@pytest.mark.parametrize("key", ["", ".", "..", "a/b", "..\\x"])
def test_path_for_rejects_non_flat_keys(storage, key):
    with pytest.raises(StorageError):
        storage.path_for(key)


async def test_save_bytes(storage):
    written = await storage.save("k1", b"hello")

    assert written == 5
    assert storage.path_for("k1").read_bytes() == b"hello"


async def test_save_async_reader_in_chunks(blob_dir):
    storage = BlobStore(blob_dir, chunk_size=3)
    data = bytes(range(256)) * 4

    written = await storage.save("k2", AsyncReader(data))

    assert written == len(data)
    assert storage.path_for("k2").read_bytes() == data


async def test_save_over_limit_leaves_nothing(storage, blob_dir):
    with pytest.raises(PayloadTooLargeError):
        await storage.save("big", ZeroReader(2048), limit=1024)

    assert list(blob_dir.iterdir()) == []


async def test_save_exactly_at_limit_succeeds(storage):
    assert await storage.save("edge", ZeroReader(1024), limit=1024) == 1024


async def test_save_never_overwrites(storage):
    await storage.save("dup", b"first")

    with pytest.raises(StorageError):
        await storage.save("dup", b"second")

    assert storage.path_for("dup").read_bytes() == b"first"


async def test_save_into_unusable_directory_fails(tmp_path):
    (tmp_path / "not-a-dir").write_bytes(b"")
    storage = BlobStore(tmp_path / "not-a-dir" / "uploads")

    with pytest.raises(StorageError):
        await storage.save("k", b"data")


async def test_failing_reader_removes_partial_blob(storage, blob_dir):
    class Broken:
        calls = 0

        def read(self, n):
            self.calls += 1
            if self.calls > 1:
                raise ConnectionResetError("client went away")
            return b"partial"

    with pytest.raises(StorageError):
        await storage.save("k", Broken())

    assert list(blob_dir.iterdir()) == []


async def test_delete(storage):
    await storage.save("k", b"x")

    assert await storage.delete("k") is True
    assert not storage.path_for("k").exists()
    assert await storage.delete("k") is False


def test_sanitize_name_budgets_bytes_not_characters():
    # four bytes per character in UTF-8
    name = sanitize_name("\U00020000" * 70 + ".txt")

    assert len(name.encode("utf-8")) <= 200
    assert name.endswith(".txt")
    assert name.startswith("\U00020000")
    assert len(make_storage_key("\U00020000" * 70 + ".txt").encode("utf-8")) < 255


async def test_save_with_long_wide_character_name(storage):
    key = make_storage_key("\U00020000" * 70 + ".txt")

    assert await storage.save(key, b"data") == 4
    assert storage.path_for(key).read_bytes() == b"data"


async def test_cancelled_upload_removes_partial_blob(storage, blob_dir):
    class Disconnecting:
        calls = 0

        async def read(self, n):
            self.calls += 1
            if self.calls > 1:
                raise asyncio.CancelledError()
            return b"partial"

    with pytest.raises(asyncio.CancelledError):
        await storage.save("k", Disconnecting())

    assert list(blob_dir.iterdir()) == []
