"""Blob area: uploaded file bytes on the local filesystem.

Blobs live in one flat directory. Their filenames are storage keys made up
on the server, so nothing a client sends ever becomes part of a path.
"""
import inspect
import io
import logging
import re
import secrets
import time
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from localdrop.errors import PayloadTooLargeError, StorageError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")
# Filesystems cap names at 255 bytes; the key prefix takes about 32
_MAX_NAME_BYTES = 200


def _truncate_utf8(text: str, max_bytes: int) -> str:
    return text.encode("utf-8")[:max(max_bytes, 0)].decode("utf-8", errors="ignore")


def sanitize_name(display_name: str) -> str:
    """Reduce a client filename to something safe to embed in a storage key."""
    name = display_name.replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_CHARS.sub("_", name).lstrip(".")
    if len(name.encode("utf-8")) > _MAX_NAME_BYTES:
        stem, dot, ext = name.rpartition(".")
        ext_bytes = len(ext.encode("utf-8"))
        if dot and ext_bytes < 16:
            name = _truncate_utf8(stem, _MAX_NAME_BYTES - ext_bytes - 1) + "." + ext
        else:
            name = _truncate_utf8(name, _MAX_NAME_BYTES)
    return name or "file"


def make_storage_key(display_name: str) -> str:
    """Time prefix + random suffix + sanitized name, e.g. `1718000000000_3f9a..._a.png`."""
    millis = int(time.time() * 1000)
    return f"{millis}_{secrets.token_hex(8)}_{sanitize_name(display_name)}"


async def _read_chunk(source, size: int) -> bytes:
    """Read from a sync (BytesIO, file) or async (UploadFile) reader."""
    chunk = source.read(size)
    if inspect.isawaitable(chunk):
        chunk = await chunk
    return chunk


class BlobStore:
    """Writes, locates and removes blobs by storage key."""

    def __init__(self, base_path: str | Path, chunk_size: int = 1024 * 1024):
        self.base_path = Path(base_path)
        self.chunk_size = chunk_size

    def ensure_dir(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, storage_key: str) -> Path:
        if not storage_key or "/" in storage_key or "\\" in storage_key or storage_key in (".", ".."):
            raise StorageError(f"Invalid storage key: {storage_key!r}")
        return self.base_path / storage_key

    async def save(self, storage_key: str, source, limit: Optional[int] = None) -> int:
        """Stream `source` into a new blob. Returns the number of bytes written.

        `source` is bytes or any object with a `read(size)` method, sync or
        async. Nothing is left on disk when this raises.
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(source)

        path = self.path_for(storage_key)
        try:
            self.ensure_dir()
        except OSError as e:
            logger.error(f"Blob area {self.base_path} is unusable: {e}")
            raise StorageError(f"File storage unavailable: {e.strerror or e}") from e

        written = 0
        try:
            # "x": never overwrite another upload's blob
            async with aiofiles.open(path, "xb") as f:
                while True:
                    chunk = await _read_chunk(source, self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if limit is not None and written > limit:
                        raise PayloadTooLargeError(f"File exceeds the {limit} byte limit")
                    await f.write(chunk)
        except FileExistsError as e:
            raise StorageError(f"Storage key already in use: {storage_key}") from e
        except OSError as e:
            await self._discard(path)
            logger.error(f"Failed to write blob {storage_key}: {e}")
            raise StorageError(f"Failed to store file: {e.strerror or e}") from e
        except BaseException:
            # also covers cancellation when the client goes away mid-upload
            await self._discard(path)
            raise

        return written

    async def delete(self, storage_key: str) -> bool:
        """Remove a blob. Returns False if it was already gone."""
        path = self.path_for(storage_key)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error(f"Failed to delete blob {storage_key}: {e}")
            raise StorageError(f"Failed to delete file: {e.strerror or e}") from e
        return True

    async def _discard(self, path: Path) -> None:
        """Best-effort removal of a partially written blob."""
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove partial blob {path.name}: {e}")
