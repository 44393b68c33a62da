"""
Tag Repository.

Data access layer for the per-user tag registry.
"""

from sqlalchemy import select

from modules.backend.models.tag import Tag
from modules.backend.repositories.base import OwnedRepository


class TagRepository(OwnedRepository[Tag]):
    """Repository for Tag model."""

    model = Tag

    async def get_by_name(self, user_id: str, name: str) -> Tag | None:
        """
        Get a user's tag by its (already normalized) name.

        Args:
            user_id: Owner
            name: Lower-cased tag name

        Returns:
            The tag, or None if the user has no tag with that name
        """
        result = await self.session.execute(
            select(Tag).where(Tag.user_id == user_id).where(Tag.name == name)
        )
        return result.scalar_one_or_none()
