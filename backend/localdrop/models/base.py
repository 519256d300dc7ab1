"""Shared helpers for the in-memory entities."""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Creation timestamp for new entities (timezone-aware, UTC)."""
    return datetime.now(timezone.utc)


def name_or_default(name: Optional[str], default: str) -> str:
    """Trimmed display name, or `default` when the name is missing or blank."""
    if name is None:
        return default
    return name.strip() or default
