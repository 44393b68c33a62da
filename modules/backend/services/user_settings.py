"""
User Settings Service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.utils import utc_now
from modules.backend.repositories.user_settings import UserSettingsRepository
from modules.backend.schemas.user_settings import (
    UserPreferences,
    UserPreferencesUpdate,
    UserSettingsResponse,
)
from modules.backend.services.base import BaseService


class UserSettingsService(BaseService):
    """Reads and saves per-user preferences."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserSettingsRepository(session)

    async def get_settings(self, user_id: str) -> UserSettingsResponse:
        """Caller's settings; defaults if they have never saved any."""
        row = await self.repo.get_for_user(user_id)
        preferences = UserPreferences(**row.preferences) if row else UserPreferences()
        return UserSettingsResponse(user_id=user_id, preferences=preferences)

    async def update_settings(
        self,
        user_id: str,
        data: UserPreferencesUpdate,
    ) -> UserSettingsResponse:
        """Merge the supplied preferences into the caller's settings, creating them if needed."""
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        row = await self.repo.get_for_user(user_id)
        current = UserPreferences(**row.preferences) if row else UserPreferences()
        merged = current.model_copy(update=changes)

        self._log_operation("Saving user settings", user_id=user_id, fields=list(changes))
        now = utc_now()
        if row is None:
            await self._execute_db_operation(
                "create_user_settings",
                self.repo.create(
                    user_id=user_id,
                    preferences=merged.model_dump(),
                    created_at=now,
                    updated_at=now,
                ),
            )
        else:
            await self._execute_db_operation(
                "update_user_settings",
                self.repo.update(row, preferences=merged.model_dump(), updated_at=now),
            )
        return UserSettingsResponse(user_id=user_id, preferences=merged)
