"""Messages API routes."""
from fastapi import APIRouter, Depends, Request

from localdrop.registries import client_address, get_messages
from localdrop.schemas.common import ApiResponse, DeleteAllResult
from localdrop.schemas.message import MessageCreate, MessageResponse
from localdrop.services.message_registry import MessageRegistry

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.get("", response_model=ApiResponse[list[MessageResponse]])
async def list_messages(messages: MessageRegistry = Depends(get_messages)):
    """List all messages, newest first."""
    return ApiResponse(data=[MessageResponse.model_validate(m) for m in messages.list_all()])


@router.post("", response_model=ApiResponse[MessageResponse])
async def create_message(
    body: MessageCreate,
    request: Request,
    messages: MessageRegistry = Depends(get_messages),
):
    """Post a new text message."""
    message = messages.append(body.content, body.author, client_address(request))
    return ApiResponse(message="Message posted", data=MessageResponse.model_validate(message))


@router.delete("/{message_id}", response_model=ApiResponse[None])
async def delete_message(
    message_id: int,
    messages: MessageRegistry = Depends(get_messages),
):
    messages.delete(message_id)
    return ApiResponse(message="Message deleted")


@router.delete("", response_model=ApiResponse[DeleteAllResult])
async def delete_all_messages(messages: MessageRegistry = Depends(get_messages)):
    """Delete every message and restart numbering."""
    removed = messages.delete_all()
    return ApiResponse(message="All messages cleared", data=DeleteAllResult(deleted=removed))
