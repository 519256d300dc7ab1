"""Shared Pydantic schemas."""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every JSON answer: {success, message, data}."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class DeleteAllResult(BaseModel):
    deleted: int = 0
