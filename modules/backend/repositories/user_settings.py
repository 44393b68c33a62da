"""
User Settings Repository.
"""

from sqlalchemy import select

from modules.backend.models.user_settings import UserSettings
from modules.backend.repositories.base import BaseRepository


class UserSettingsRepository(BaseRepository[UserSettings]):
    """Repository for UserSettings model."""

    model = UserSettings

    async def get_for_user(self, user_id: str) -> UserSettings | None:
        """Get a user's settings row, if one has been saved."""
        result = await self.session.execute(
            select(UserSettings).where(UserSettings.user_id == user_id)
        )
        return result.scalar_one_or_none()
