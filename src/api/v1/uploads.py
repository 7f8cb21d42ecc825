# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Generic file upload endpoints."""

from fastapi import APIRouter, Depends, File, UploadFile

from src.api.deps import get_upload_service, require_roles
from src.errors import NotFoundError, UploadError, error_item
from src.models import User
from src.schemas.common import ApiResponse
from src.schemas.upload import (
    FileInfoResponse,
    UploadedFileResponse,
    UploadedFilesResponse,
)
from src.services.upload_service import StoredFile, UploadService

router = APIRouter()


def _uploaded(item: StoredFile) -> UploadedFileResponse:
    return UploadedFileResponse(
        filename=item.filename,
        original_name=item.original_name,
        size=item.size,
        mimetype=item.mimetype,
        url=item.url,
    )


def _no_file(field: str) -> UploadError:
    message = "No file uploaded"
    return UploadError(message, [error_item(field, message)])


@router.post("/single", response_model=ApiResponse[UploadedFileResponse])
async def upload_single(
    file: UploadFile | None = File(None),
    uploads: UploadService = Depends(get_upload_service),
    _: User | None = Depends(require_roles()),
) -> ApiResponse[UploadedFileResponse]:
    """Upload one file in the ``file`` field."""
    stored = await uploads.save_one("file", file)
    if stored is None:
        raise _no_file("file")
    return ApiResponse(message="File uploaded successfully", data=_uploaded(stored))


@router.post("/multiple", response_model=ApiResponse[UploadedFilesResponse])
async def upload_multiple(
    files: list[UploadFile] | None = File(None),
    uploads: UploadService = Depends(get_upload_service),
    _: User | None = Depends(require_roles()),
) -> ApiResponse[UploadedFilesResponse]:
    """Upload several files in the ``files`` field."""
    stored = await uploads.save("files", files or [])
    if not stored:
        raise _no_file("files")
    return ApiResponse(
        message="Files uploaded successfully",
        data=UploadedFilesResponse(
            files=[_uploaded(item) for item in stored], count=len(stored)
        ),
    )


@router.get("/info/{filename}", response_model=ApiResponse[FileInfoResponse])
def get_file_info(
    filename: str,
    uploads: UploadService = Depends(get_upload_service),
) -> ApiResponse[FileInfoResponse]:
    info = uploads.store.stat(filename)
    if info is None:
        raise NotFoundError("File not found")
    return ApiResponse(
        data=FileInfoResponse(
            filename=filename,
            size=info.size,
            created=info.created,
            modified=info.modified,
            url=f"/uploads/{filename}",
        )
    )


@router.delete("/{filename}", response_model=ApiResponse[None])
def delete_file(
    filename: str,
    uploads: UploadService = Depends(get_upload_service),
    _: User | None = Depends(require_roles()),
) -> ApiResponse[None]:
    if not uploads.delete(filename):
        raise NotFoundError("File not found")
    return ApiResponse(message="File deleted successfully")
