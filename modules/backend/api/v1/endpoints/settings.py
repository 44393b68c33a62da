"""
User Settings API Endpoints.
"""

from fastapi import APIRouter

from modules.backend.core.dependencies import CurrentUserId, DbSession, RequestId
from modules.backend.schemas.base import ApiResponse, ResponseMetadata
from modules.backend.schemas.user_settings import UserPreferencesUpdate, UserSettingsResponse
from modules.backend.services.user_settings import UserSettingsService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[UserSettingsResponse],
    summary="Get settings",
    description="Caller's preferences, or the defaults if none have been saved.",
)
async def get_settings(
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[UserSettingsResponse]:
    result = await UserSettingsService(db).get_settings(user_id)
    return ApiResponse(data=result, metadata=ResponseMetadata(request_id=request_id))


@router.patch(
    "",
    response_model=ApiResponse[UserSettingsResponse],
    summary="Update settings",
    description="Merge the provided preferences into the saved ones.",
)
async def update_settings(
    data: UserPreferencesUpdate,
    db: DbSession,
    user_id: CurrentUserId,
    request_id: RequestId,
) -> ApiResponse[UserSettingsResponse]:
    result = await UserSettingsService(db).update_settings(user_id, data)
    return ApiResponse(data=result, metadata=ResponseMetadata(request_id=request_id))
