"""
Files API Endpoints.

Upload slots, image inspirations, retrieval URLs and downloads.

Uploads happen in two steps: an authenticated call reserves a slot and
returns an upload URL, then the client sends the raw bytes to that URL
without an Authorization header. With the S3 driver the URL is a presigned
PUT on the bucket; with the local driver it is /files/upload/{token} below.
"""

from fastapi import APIRouter, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.config import get_app_config
from modules.backend.core.dependencies import Blobs, CurrentUserId, DbSession, RequestId
from modules.backend.core.exceptions import ValidationError
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.file import (
    FileUrlResponse,
    ImageInspirationCreate,
    ImageWithUrl,
    UploadResult,
    UploadUrlResponse,
)
from modules.backend.schemas.inspiration import InspirationResponse
from modules.backend.services.file import FileService
from modules.backend.storage.base import BlobStore

router = APIRouter()


def _file_service(db: AsyncSession, blobs: BlobStore) -> FileService:
    return FileService(
        db,
        blobs,
        max_upload_bytes=get_app_config().storage.max_upload_bytes,
    )


def _too_large(size: int, max_bytes: int) -> ValidationError:
    return ValidationError(
        "Uploaded file is too large",
        details={"max_bytes": max_bytes, "size": size},
    )


async def read_upload_body(request: Request, max_bytes: int) -> bytes:
    """
    Read the request body, refusing to buffer more than ``max_bytes``.

    A declared Content-Length over the limit is rejected before any of the
    body is read; otherwise the stream is cut off once it passes the limit.
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise _too_large(int(declared), max_bytes)

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise _too_large(len(body), max_bytes)
    return bytes(body)


@router.post(
    "/upload-url",
    response_model=ApiResponse[UploadUrlResponse],
    summary="Reserve an upload URL",
    description="Returns a short-lived URL that accepts a single file upload.",
)
async def generate_upload_url(
    db: DbSession,
    blobs: Blobs,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[UploadUrlResponse]:
    result = await _file_service(db, blobs).generate_upload_url(user_id)
    return ApiResponse(data=result, metadata=ResponseMetadata(request_id=request_id))


@router.api_route(
    "/upload/{token}",
    methods=["PUT", "POST"],
    response_model=ApiResponse[UploadResult],
    status_code=201,
    summary="Upload file bytes",
    description="Upload target. The request body is the raw file content.",
)
async def upload_file(
    token: str,
    request: Request,
    db: DbSession,
    blobs: Blobs,
    request_id: RequestId,
) -> ApiResponse[UploadResult]:
    """Store the request body under the slot named in the upload token."""
    data = await read_upload_body(request, get_app_config().storage.max_upload_bytes)
    stored = await _file_service(db, blobs).upload(
        token,
        data,
        request.headers.get("content-type"),
    )
    return ApiResponse(
        data=UploadResult(
            storage_id=stored.id,
            size=stored.size,
            content_type=stored.content_type,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/images",
    response_model=ApiResponse[list[ImageWithUrl]],
    summary="List images",
    description="Caller's image inspirations, newest first, with file URLs resolved.",
)
async def list_images(
    db: DbSession,
    blobs: Blobs,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[ImageWithUrl]]:
    images = await _file_service(db, blobs).get_user_images(user_id)
    return ApiResponse(data=images, metadata=ResponseMetadata(request_id=request_id))


@router.post(
    "/images",
    response_model=ApiResponse[InspirationResponse],
    status_code=201,
    summary="Create an image inspiration",
    description="Register an uploaded file as an image inspiration.",
)
async def create_image_inspiration(
    data: ImageInspirationCreate,
    db: DbSession,
    blobs: Blobs,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[InspirationResponse]:
    inspiration = await _file_service(db, blobs).create_image_inspiration(user_id, data)
    return ApiResponse(
        data=InspirationResponse.model_validate(inspiration),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{file_id}/url",
    response_model=ApiResponse[FileUrlResponse],
    summary="Get a file URL",
    description="Retrieval URL for one of the caller's files; url is null if there is none.",
)
async def get_file_url(
    file_id: str,
    db: DbSession,
    blobs: Blobs,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[FileUrlResponse]:
    url = await _file_service(db, blobs).get_file_url(user_id, file_id)
    return ApiResponse(
        data=FileUrlResponse(url=url),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{file_id}",
    summary="Download a file",
    response_class=Response,
)
async def download_file(
    file_id: str,
    db: DbSession,
    blobs: Blobs,
) -> Response:
    """Serve the stored bytes. The file id acts as the capability."""
    data, content_type = await _file_service(db, blobs).read_file(file_id)
    return Response(
        content=data,
        media_type=content_type or "application/octet-stream",
    )


@router.delete(
    "/{file_id}",
    status_code=204,
    summary="Delete a file",
    description="Delete one of the caller's files, and its inspiration when inspiration_id is given.",
)
async def delete_file(
    file_id: str,
    db: DbSession,
    blobs: Blobs,
    user_id: CurrentUserId,
    inspiration_id: str | None = Query(
        default=None,
        description="Image inspiration referencing this file, deleted with it",
    ),
) -> None:
    await _file_service(db, blobs).delete_file(user_id, file_id, inspiration_id=inspiration_id)
