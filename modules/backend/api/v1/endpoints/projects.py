"""
Projects API Endpoints.

REST API endpoints for project management and the per-project views of
scripts, notes and inspirations.
"""

from fastapi import APIRouter

from modules.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.inspiration import InspirationResponse
from modules.backend.schemas.note import NoteResponse
from modules.backend.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from modules.backend.schemas.script import ScriptResponse
from modules.backend.services.inspiration import InspirationService
from modules.backend.services.note import NoteService
from modules.backend.services.project import ProjectService
from modules.backend.services.script import ScriptService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[ProjectResponse],
    status_code=201,
    summary="Create a project",
)
async def create_project(
    data: ProjectCreate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[ProjectResponse]:
    """Create a new project owned by the caller."""
    project = await ProjectService(db).create(user_id, data)
    return ApiResponse(
        data=ProjectResponse.model_validate(project),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[ProjectResponse]],
    summary="List projects",
    description="All of the caller's projects, newest first.",
)
async def list_projects(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[ProjectResponse]]:
    projects = await ProjectService(db).list_all(user_id)
    return ApiResponse(
        data=[ProjectResponse.model_validate(project) for project in projects],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{project_id}",
    response_model=ApiResponse[ProjectResponse],
    summary="Get a project",
)
async def get_project(
    project_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[ProjectResponse]:
    """Get a project by ID."""
    project = await ProjectService(db).get(user_id, project_id)
    return ApiResponse(
        data=ProjectResponse.model_validate(project),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{project_id}",
    response_model=ApiResponse[ProjectResponse],
    summary="Update a project",
    description="Update an existing project. Only provided fields are updated.",
)
async def update_project(
    project_id: str,
    data: ProjectUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[ProjectResponse]:
    project = await ProjectService(db).update(user_id, project_id, data)
    return ApiResponse(
        data=ProjectResponse.model_validate(project),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{project_id}",
    status_code=204,
    summary="Delete a project",
    description="Delete a project. Scripts, notes and inspirations filed under it are kept.",
)
async def delete_project(
    project_id: str,
    db: DbSession,
    user_id: CurrentUserId,
) -> None:
    await ProjectService(db).delete(user_id, project_id)


@router.get(
    "/{project_id}/scripts",
    response_model=ApiResponse[list[ScriptResponse]],
    summary="List a project's scripts",
)
async def list_project_scripts(
    project_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[ScriptResponse]]:
    scripts = await ScriptService(db).list_by_project(user_id, project_id)
    return ApiResponse(
        data=[ScriptResponse.model_validate(script) for script in scripts],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{project_id}/notes",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List a project's notes",
)
async def list_project_notes(
    project_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    notes = await NoteService(db).list_by_project(user_id, project_id)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{project_id}/inspirations",
    response_model=ApiResponse[list[InspirationResponse]],
    summary="List a project's inspirations",
)
async def list_project_inspirations(
    project_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[InspirationResponse]]:
    inspirations = await InspirationService(db).list_by_project(user_id, project_id)
    return ApiResponse(
        data=[InspirationResponse.model_validate(item) for item in inspirations],
        metadata=ResponseMetadata(request_id=request_id),
    )
