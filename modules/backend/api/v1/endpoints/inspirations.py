"""
Inspirations API Endpoints.

REST API endpoints for saved links, images and files. Link metadata is
resolved on the server when a link is created.
"""

from fastapi import APIRouter, Query

from modules.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.inspiration import (
    InspirationCreate,
    InspirationResponse,
    InspirationUpdate,
)
from modules.backend.services.inspiration import InspirationService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[InspirationResponse],
    status_code=201,
    summary="Create an inspiration",
)
async def create_inspiration(
    data: InspirationCreate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[InspirationResponse]:
    inspiration = await InspirationService(db).create(user_id, data)
    return ApiResponse(
        data=InspirationResponse.model_validate(inspiration),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[InspirationResponse]],
    summary="List inspirations",
)
async def list_inspirations(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    project_id: str | None = Query(
        default=None,
        description="Only inspirations filed under this project",
    ),
) -> ApiResponse[list[InspirationResponse]]:
    """List the caller's inspirations, newest first."""
    inspirations = await InspirationService(db).list_all(user_id, project_id=project_id)
    return ApiResponse(
        data=[InspirationResponse.model_validate(item) for item in inspirations],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{inspiration_id}",
    response_model=ApiResponse[InspirationResponse],
    summary="Get an inspiration",
)
async def get_inspiration(
    inspiration_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[InspirationResponse]:
    inspiration = await InspirationService(db).get(user_id, inspiration_id)
    return ApiResponse(
        data=InspirationResponse.model_validate(inspiration),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{inspiration_id}",
    response_model=ApiResponse[InspirationResponse],
    summary="Update an inspiration",
    description="Update title, project or tags. The URL and resolved metadata are fixed.",
)
async def update_inspiration(
    inspiration_id: str,
    data: InspirationUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[InspirationResponse]:
    inspiration = await InspirationService(db).update(user_id, inspiration_id, data)
    return ApiResponse(
        data=InspirationResponse.model_validate(inspiration),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{inspiration_id}",
    status_code=204,
    summary="Delete an inspiration",
    description="Delete the record only. Use DELETE /files/{file_id} to remove an image with its blob.",
)
async def delete_inspiration(
    inspiration_id: str,
    db: DbSession,
    user_id: CurrentUserId,
) -> None:
    await InspirationService(db).delete(user_id, inspiration_id)
