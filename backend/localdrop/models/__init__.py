"""Entities held by the registries."""
from localdrop.models.message import Message
from localdrop.models.file_record import FileRecord

__all__ = ["Message", "FileRecord"]
