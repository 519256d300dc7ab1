"""In-process registries and the FastAPI dependencies that hand them out.

Usage in routes:
    from localdrop.registries import get_messages

    @router.get("/items")
    async def list_items(messages: MessageRegistry = Depends(get_messages)):
        return messages.list_all()
"""
from dataclasses import dataclass

from fastapi import Request

from localdrop.config import Settings
from localdrop.services.file_registry import FileRegistry
from localdrop.services.file_storage import BlobStore
from localdrop.services.message_registry import MessageRegistry


@dataclass
class Registries:
    messages: MessageRegistry
    files: FileRegistry


def build_registries(settings: Settings) -> Registries:
    """Fresh, empty registries. State lives only as long as the process."""
    storage = BlobStore(settings.FILE_STORAGE_PATH, chunk_size=settings.UPLOAD_CHUNK_BYTES)
    return Registries(
        messages=MessageRegistry(
            anonymous_name=settings.ANONYMOUS_NAME,
            max_length=settings.MAX_MESSAGE_LENGTH,
        ),
        files=FileRegistry(
            storage,
            max_upload_bytes=settings.MAX_UPLOAD_BYTES,
            anonymous_name=settings.ANONYMOUS_NAME,
        ),
    )


def get_messages(request: Request) -> MessageRegistry:
    """FastAPI dependency returning the app's message registry."""
    return request.app.state.registries.messages


def get_files(request: Request) -> FileRegistry:
    """FastAPI dependency returning the app's file registry."""
    return request.app.state.registries.files


def client_address(request: Request) -> str | None:
    return request.client.host if request.client else None
