"""Message request/response schemas."""
from datetime import datetime
from typing import Optional

from localdrop.schemas.base import CamelModel, CamelORMModel


class MessageCreate(CamelModel):
    # Presence and emptiness are checked by the registry, not here
    content: Optional[str] = None
    author: Optional[str] = None


class MessageResponse(CamelORMModel):
    id: int
    content: str
    author: str
    created_at: datetime
    source_address: Optional[str] = None
