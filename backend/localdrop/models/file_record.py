"""FileRecord model - file metadata (actual bytes live in the blob area)."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class FileRecord:
    id: int
    # Client-supplied filename, only used for display and download headers
    display_name: str
    # Generated on the server, the blob's filename on disk
    storage_key: str
    size_bytes: int
    mime_type: str
    uploader: str
    created_at: datetime
    source_address: Optional[str] = None
