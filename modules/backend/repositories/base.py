"""
Base Repository.

Base classes for all repositories with common CRUD operations
and per-user ownership scoping.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import NotFoundError
from modules.backend.core.logging import get_logger
from modules.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class TagRepository(BaseRepository[Tag]):
            model = Tag
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Apply field values to a loaded record.

        List and dict columns must be given new objects, not mutated in
        place, so the change is detected.
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete a loaded record."""
        await self.session.delete(instance)
        await self.session.flush()


class OwnedRepository(BaseRepository[ModelType]):
    """
    Repository for models carrying a ``user_id`` owner column.

    Every read is scoped to one user. A record owned by someone else is
    reported exactly like a missing one.
    """

    async def get_owned(self, id: str, user_id: str) -> ModelType:
        """
        Get a record owned by ``user_id``.

        Raises:
            NotFoundError: If the record is missing or owned by another user
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None or instance.user_id != user_id:
            raise NotFoundError(f"{self.model.__name__} not found or access denied")
        return instance

    async def list_for_user(self, user_id: str) -> list[ModelType]:
        """All of a user's records, newest first."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())


class ContentRepository(OwnedRepository[ModelType]):
    """
    Repository for taggable content tables.

    Tag membership is checked in Python over the user's rows: tags live
    in a JSON array and containment operators differ between backends.
    """

    async def list_tagged(self, user_id: str, tag_name: str) -> list[ModelType]:
        """User's records whose tags array contains ``tag_name``."""
        return [
            item for item in await self.list_for_user(user_id)
            if tag_name in item.tags
        ]


class ProjectScopedRepository(ContentRepository[ModelType]):
    """Content repository for models with an optional ``project_id``."""

    async def list_by_project(self, project_id: str, user_id: str) -> list[ModelType]:
        """User's records filed under a project, newest first."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.project_id == project_id)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_uncategorized(self, user_id: str) -> list[ModelType]:
        """User's records not filed under any project, newest first."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .where(self.model.project_id.is_(None))
            .order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())
