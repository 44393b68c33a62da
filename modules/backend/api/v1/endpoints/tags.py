"""
Tags API Endpoints.

REST API endpoints for the tag registry and for tagging content items.
"""

from typing import Any

from fastapi import APIRouter, Query

from modules.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.inspiration import InspirationResponse
from modules.backend.schemas.note import NoteResponse
from modules.backend.schemas.project import ProjectResponse
from modules.backend.schemas.script import ScriptResponse
from modules.backend.schemas.tag import (
    ContentByTagResponse,
    ItemType,
    TagAssign,
    TagCreate,
    TagResponse,
    TagUsageResponse,
)
from modules.backend.services.tag import TagService

router = APIRouter()

# Query tag names get the same blank check as TagAssign bodies
NON_BLANK = r"^\s*\S"

ITEM_RESPONSE_SCHEMAS = {
    ItemType.PROJECTS: ProjectResponse,
    ItemType.SCRIPTS: ScriptResponse,
    ItemType.NOTES: NoteResponse,
    ItemType.INSPIRATIONS: InspirationResponse,
}


def _item_response(item_type: ItemType, item: Any) -> dict[str, Any]:
    """Serialize a content item with the response schema of its table."""
    schema = ITEM_RESPONSE_SCHEMAS[item_type]
    return schema.model_validate(item).model_dump(mode="json")


@router.get(
    "",
    response_model=ApiResponse[list[TagResponse]],
    summary="List tags",
)
async def list_tags(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[TagResponse]]:
    """List the caller's tags, newest first."""
    tags = await TagService(db).list_tags(user_id)
    return ApiResponse(
        data=[TagResponse.model_validate(tag) for tag in tags],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[TagResponse],
    summary="Create or recolor a tag",
    description="Create a tag, or update the color of an existing tag with the same name.",
)
async def create_or_update_tag(
    data: TagCreate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[TagResponse]:
    tag = await TagService(db).create_or_update_tag(user_id, data)
    return ApiResponse(
        data=TagResponse.model_validate(tag),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/usage",
    response_model=ApiResponse[list[TagUsageResponse]],
    summary="List tags with usage",
    description="Tags with the stored usage_count and the scanned actual_usage_count.",
)
async def list_tags_with_usage(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[TagUsageResponse]]:
    tags = await TagService(db).list_tags_with_usage(user_id)
    return ApiResponse(data=tags, metadata=ResponseMetadata(request_id=request_id))


@router.post(
    "/reconcile",
    response_model=ApiResponse[list[TagUsageResponse]],
    summary="Reconcile tag usage counts",
    description="Overwrite each stored usage_count with the scanned count. Safe to repeat.",
)
async def reconcile_usage_counts(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[TagUsageResponse]]:
    tags = await TagService(db).reconcile_usage_counts(user_id)
    return ApiResponse(data=tags, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/content",
    response_model=ApiResponse[ContentByTagResponse],
    summary="Get content by tag",
)
async def get_content_by_tag(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    name: str = Query(
        ...,
        min_length=1,
        max_length=100,
        pattern=NON_BLANK,
        description="Tag name; must not be blank",
    ),
) -> ApiResponse[ContentByTagResponse]:
    """Caller's projects, scripts, notes and inspirations carrying the tag."""
    groups = await TagService(db).get_content_by_tag(user_id, name)
    content = ContentByTagResponse(
        **{
            item_type.value: [_item_response(item_type, item) for item in items]
            for item_type, items in groups.items()
        }
    )
    return ApiResponse(data=content, metadata=ResponseMetadata(request_id=request_id))


@router.delete(
    "/{tag_id}",
    response_model=ApiResponse[dict[str, int]],
    summary="Delete a tag",
    description="Delete a tag and remove its name from all of the caller's content.",
)
async def delete_tag(
    tag_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[dict[str, int]]:
    edited = await TagService(db).delete_tag(user_id, tag_id)
    return ApiResponse(
        data={"items_updated": edited},
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/items/{item_type}/{item_id}",
    response_model=ApiResponse[dict[str, Any]],
    summary="Tag a content item",
)
async def add_tag_to_item(
    item_type: ItemType,
    item_id: str,
    data: TagAssign,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[dict[str, Any]]:
    """Attach a tag to a project, script, note or inspiration."""
    item = await TagService(db).add_tag_to_item(user_id, item_type, item_id, data.name)
    return ApiResponse(
        data=_item_response(item_type, item),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/items/{item_type}/{item_id}",
    response_model=ApiResponse[dict[str, Any]],
    summary="Untag a content item",
)
async def remove_tag_from_item(
    item_type: ItemType,
    item_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    name: str = Query(
        ...,
        min_length=1,
        max_length=100,
        pattern=NON_BLANK,
        description="Tag name; must not be blank",
    ),
) -> ApiResponse[dict[str, Any]]:
    item = await TagService(db).remove_tag_from_item(user_id, item_type, item_id, name)
    return ApiResponse(
        data=_item_response(item_type, item),
        metadata=ResponseMetadata(request_id=request_id),
    )
