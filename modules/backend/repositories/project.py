"""
Project Repository.

Data access layer for projects.
"""

from modules.backend.models.project import Project
from modules.backend.repositories.base import ContentRepository


class ProjectRepository(ContentRepository[Project]):
    """Repository for Project model."""

    model = Project
