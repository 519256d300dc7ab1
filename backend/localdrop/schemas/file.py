"""File response schemas."""
from datetime import datetime
from typing import Optional

from localdrop.schemas.base import CamelORMModel


class FileResponse(CamelORMModel):
    id: int
    display_name: str
    storage_key: str
    size_bytes: int
    mime_type: str
    uploader: str
    created_at: datetime
    source_address: Optional[str] = None
