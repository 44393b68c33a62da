"""
Inspiration Repository.

Data access layer for inspirations.
"""

from sqlalchemy import select

from modules.backend.models.inspiration import Inspiration
from modules.backend.repositories.base import ProjectScopedRepository


class InspirationRepository(ProjectScopedRepository[Inspiration]):
    """Repository for Inspiration model."""

    model = Inspiration

    async def list_by_type(self, user_id: str, type_: str) -> list[Inspiration]:
        """User's inspirations of one type, newest first."""
        result = await self.session.execute(
            select(Inspiration)
            .where(Inspiration.user_id == user_id)
            .where(Inspiration.type == type_)
            .order_by(Inspiration.created_at.desc())
        )
        return list(result.scalars().all())
