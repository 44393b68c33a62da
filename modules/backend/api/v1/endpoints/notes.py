"""
Notes API Endpoints.

REST API endpoints for note management, including the inbox of
notes not filed under any project.
"""

from fastapi import APIRouter, Query

from modules.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from modules.backend.services.note import NoteService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a note. Without content it starts with one empty text block.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = await NoteService(db).create(user_id, data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
)
async def list_notes(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
    project_id: str | None = Query(
        default=None,
        description="Only notes filed under this project",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """List the caller's notes, newest first."""
    notes = await NoteService(db).list_all(user_id, project_id=project_id)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/uncategorized",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List uncategorized notes",
    description="Notes that are not filed under any project.",
)
async def list_uncategorized_notes(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    notes = await NoteService(db).list_uncategorized(user_id)
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
)
async def get_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    note = await NoteService(db).get(user_id, note_id)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description="Only provided fields are updated. Send project_id null to move it to the inbox.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    note = await NoteService(db).update(user_id, note_id, data)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    user_id: CurrentUserId,
) -> None:
    await NoteService(db).delete(user_id, note_id)
