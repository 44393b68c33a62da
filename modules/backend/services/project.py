"""
Project Service.

Business logic for projects.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.models.project import Project
from modules.backend.repositories.project import ProjectRepository
from modules.backend.schemas.project import ProjectCreate
from modules.backend.services.content import ContentService


class ProjectService(ContentService[Project]):
    """
    Service for project business logic.

    Deleting a project does not cascade: its scripts, notes and
    inspirations keep their project_id and simply stop resolving.
    """

    nullable_fields = frozenset({"description"})

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ProjectRepository(session)

    async def create(self, user_id: str, data: ProjectCreate) -> Project:
        """Create a project owned by the caller."""
        return await self._create(
            user_id,
            title=data.title,
            description=data.description,
            tags=list(data.tags),
        )
