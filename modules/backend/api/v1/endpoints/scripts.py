"""
Scripts API Endpoints.

REST API endpoints for script management, including the inbox of
scripts not filed under any project.
"""

from fastapi import APIRouter, Query

from modules.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.script import ScriptCreate, ScriptResponse, ScriptUpdate
from modules.backend.services.script import ScriptService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[ScriptResponse],
    status_code=201,
    summary="Create a script",
    description="Create a script. Without content it starts with one empty text block.",
)
async def create_script(
    data: ScriptCreate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[ScriptResponse]:
    """Create a new script."""
    script = await ScriptService(db).create(user_id, data)
    return ApiResponse(
        data=ScriptResponse.model_validate(script),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[ScriptResponse]],
    summary="List scripts",
)
async def list_scripts(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    project_id: str | None = Query(
        default=None,
        description="Only scripts filed under this project",
    ),
) -> ApiResponse[list[ScriptResponse]]:
    """List the caller's scripts, newest first."""
    scripts = await ScriptService(db).list_all(user_id, project_id=project_id)
    return ApiResponse(
        data=[ScriptResponse.model_validate(script) for script in scripts],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/uncategorized",
    response_model=ApiResponse[list[ScriptResponse]],
    summary="List uncategorized scripts",
    description="Scripts that are not filed under any project.",
)
async def list_uncategorized_scripts(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[ScriptResponse]]:
    scripts = await ScriptService(db).list_uncategorized(user_id)
    return ApiResponse(
        data=[ScriptResponse.model_validate(script) for script in scripts],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{script_id}",
    response_model=ApiResponse[ScriptResponse],
    summary="Get a script",
)
async def get_script(
    script_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[ScriptResponse]:
    """Get a script by ID."""
    script = await ScriptService(db).get(user_id, script_id)
    return ApiResponse(
        data=ScriptResponse.model_validate(script),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{script_id}",
    response_model=ApiResponse[ScriptResponse],
    summary="Update a script",
    description="Only provided fields are updated. Send project_id null to move it to the inbox.",
)
async def update_script(
    script_id: str,
    data: ScriptUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[ScriptResponse]:
    """Update a script."""
    script = await ScriptService(db).update(user_id, script_id, data)
    return ApiResponse(
        data=ScriptResponse.model_validate(script),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{script_id}",
    status_code=204,
    summary="Delete a script",
)
async def delete_script(
    script_id: str,
    db: DbSession,
    user_id: CurrentUserId,
) -> None:
    """Delete a script."""
    await ScriptService(db).delete(user_id, script_id)
