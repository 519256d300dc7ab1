"""Message model - a text post shared on the LAN."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Message:
    id: int
    content: str
    author: str
    created_at: datetime
    # Peer address of the poster, informational only
    source_address: Optional[str] = None
