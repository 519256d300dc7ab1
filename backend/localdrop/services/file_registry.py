"""File registry: metadata of uploaded files, paired with their blobs.

Every record owns exactly one blob. An append writes the blob first and only
then adds the record, so a failed upload leaves nothing behind. Deletes
take the record out of view before removing its blob and put it back if
the blob cannot be removed, so readers never see a record without a blob.

Mutations are serialized by an asyncio.Lock because deletes await blob I/O
inside the critical section. Appends stream their blob before taking the
lock (each upload writes to its own fresh key) and hold it only to allocate
the id and insert the record.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from localdrop.errors import (
    BlobMissingError,
    NotFoundError,
    PayloadTooLargeError,
    StorageError,
    ValidationError,
)
from localdrop.models.base import name_or_default, utcnow
from localdrop.models.file_record import FileRecord
from localdrop.services.file_storage import BlobStore, make_storage_key
from localdrop.services.sequence import IdSequence, newest_first

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class FileRegistry:
    """Ordered store of FileRecord entries and the blobs they own."""

    def __init__(
        self,
        storage: BlobStore,
        max_upload_bytes: int = 50 * 1024 * 1024,
        anonymous_name: str = "anonymous",
    ):
        self.storage = storage
        self.max_upload_bytes = max_upload_bytes
        self.anonymous_name = anonymous_name
        self._records: list[FileRecord] = []
        self._ids = IdSequence()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    async def append(
        self,
        display_name: Optional[str],
        blob,
        size_bytes: Optional[int] = None,
        mime_type: Optional[str] = None,
        uploader: Optional[str] = None,
        source_address: Optional[str] = None,
    ) -> FileRecord:
        """Store an uploaded file and return its record.

        Args:
            display_name: Client filename, kept for display only.
            blob: The bytes, or a reader with a (sync or async) `read(size)`.
            size_bytes: Size declared by the client, if known. Checked
                against the limit before anything is written; the stored
                size is what actually got written.
            mime_type: Client-declared content type, not verified.
            uploader: Display name of the uploader.
            source_address: Peer address, informational only.

        Raises:
            ValidationError: No filename was given.
            PayloadTooLargeError: The file is over the upload limit.
            StorageError: The blob could not be written.
        """
        name = (display_name or "").strip()
        if not name:
            raise ValidationError("No file selected")

        limit = self.max_upload_bytes
        if size_bytes is not None and size_bytes > limit:
            logger.warning(f"Rejected upload {name!r}: declared {size_bytes} bytes, limit {limit}")
            raise PayloadTooLargeError(f"File exceeds the {limit} byte limit")

        storage_key = make_storage_key(name)
        try:
            written = await self.storage.save(storage_key, blob, limit=limit)
        except PayloadTooLargeError:
            logger.warning(f"Rejected upload {name!r}: over {limit} bytes")
            raise

        async with self._lock:
            record = FileRecord(
                id=self._ids.next(),
                display_name=name,
                storage_key=storage_key,
                size_bytes=written,
                mime_type=(mime_type or "").strip() or DEFAULT_MIME_TYPE,
                uploader=name_or_default(uploader, self.anonymous_name),
                created_at=utcnow(),
                source_address=source_address,
            )
            self._records.append(record)

        logger.info(
            f"File {record.id} uploaded: {name!r} ({written} bytes) as {storage_key} "
            f"by {record.uploader!r} from {source_address}"
        )
        return record

    def list_all(self) -> list[FileRecord]:
        """Snapshot of all records, newest first."""
        return newest_first(list(self._records))

    def get(self, file_id: int) -> FileRecord:
        for record in self._records:
            if record.id == file_id:
                return record
        raise NotFoundError("File not found")

    def resolve(self, file_id: int) -> tuple[FileRecord, Path]:
        """Record and on-disk location of a file's blob.

        Raises NotFoundError if there is no such record, BlobMissingError if
        the record exists but its blob is gone.
        """
        record = self.get(file_id)
        path = self.storage.path_for(record.storage_key)
        if not path.is_file():
            logger.warning(f"Blob {record.storage_key} of file {file_id} is missing")
            raise BlobMissingError("File content is missing from storage")
        return record, path

    async def delete(self, file_id: int) -> FileRecord:
        """Remove a record and its blob. A blob that is already gone is not an error."""
        async with self._lock:
            record = self.get(file_id)
            # Readers must not see the record once its blob starts going away
            index = self._records.index(record)
            del self._records[index]
            try:
                if not await self.storage.delete(record.storage_key):
                    logger.warning(f"Blob {record.storage_key} of file {file_id} was already gone")
            except StorageError:
                self._records.insert(index, record)
                raise

        logger.info(f"File {file_id} deleted ({record.storage_key})")
        return record

    async def delete_all(self) -> int:
        """Remove every record and blob, then restart numbering at 1.

        Records whose blob cannot be removed are kept (and numbering is not
        reset); StorageError is raised once the rest are gone.
        """
        async with self._lock:
            doomed, self._records = self._records, []
            kept: list[FileRecord] = []
            for record in doomed:
                try:
                    await self.storage.delete(record.storage_key)
                except StorageError:
                    kept.append(record)
            removed = len(doomed) - len(kept)
            self._records = kept
            if not kept:
                self._ids.reset()

        logger.info(f"Cleared {removed} file(s)")
        if kept:
            raise StorageError(f"Could not remove {len(kept)} file(s)")
        return removed
