"""Blob sources for file registry tests."""


class ZeroReader:
    """File-like source producing `size` zero bytes without holding them in memory."""

    def __init__(self, size: int):
        self.remaining = size

    def read(self, n: int = -1) -> bytes:
        if n < 0 or n > self.remaining:
            n = self.remaining
        self.remaining -= n
        return b"\0" * n


class AsyncReader:
    """Async `read(size)` source, shaped like FastAPI's UploadFile."""

    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    async def read(self, n: int = -1) -> bytes:
        end = len(self._data) if n < 0 else self._pos + n
        chunk = self._data[self._pos:end]
        self._pos += len(chunk)
        return chunk
