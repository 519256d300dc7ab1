"""Files API routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, UploadFile, File as FastAPIFile
from fastapi.responses import FileResponse

from localdrop.errors import ValidationError
from localdrop.registries import client_address, get_files
from localdrop.schemas.common import ApiResponse, DeleteAllResult
from localdrop.schemas.file import FileResponse as FileResponseSchema
from localdrop.services.file_registry import FileRegistry

router = APIRouter(prefix="/api/files", tags=["files"])


@router.get("", response_model=ApiResponse[list[FileResponseSchema]])
async def list_files(files: FileRegistry = Depends(get_files)):
    """List all uploaded files, newest first."""
    return ApiResponse(data=[FileResponseSchema.model_validate(r) for r in files.list_all()])


@router.post("", response_model=ApiResponse[FileResponseSchema])
async def upload_file(
    request: Request,
    file: Optional[UploadFile] = FastAPIFile(None),
    uploader: Optional[str] = Form(None),
    files: FileRegistry = Depends(get_files),
):
    """Upload a file and create a file record."""
    if file is None:
        raise ValidationError("No file selected")

    try:
        record = await files.append(
            file.filename,
            file,
            size_bytes=file.size,
            mime_type=file.content_type,
            uploader=uploader,
            source_address=client_address(request),
        )
    finally:
        await file.close()

    return ApiResponse(message="File uploaded", data=FileResponseSchema.model_validate(record))


@router.get("/{file_id}/download")
async def download_file(
    file_id: int,
    files: FileRegistry = Depends(get_files),
):
    """Download a file by ID under its original name."""
    record, path = files.resolve(file_id)
    return FileResponse(
        path=path,
        filename=record.display_name,
        media_type=record.mime_type,
    )


@router.delete("/{file_id}", response_model=ApiResponse[None])
async def delete_file(
    file_id: int,
    files: FileRegistry = Depends(get_files),
):
    """Delete a file and its record."""
    await files.delete(file_id)
    return ApiResponse(message="File deleted")


@router.delete("", response_model=ApiResponse[DeleteAllResult])
async def delete_all_files(files: FileRegistry = Depends(get_files)):
    removed = await files.delete_all()
    return ApiResponse(message="All files cleared", data=DeleteAllResult(deleted=removed))
