"""
Script Repository.

Data access layer for scripts.
"""

from modules.backend.models.script import Script
from modules.backend.repositories.base import ProjectScopedRepository


class ScriptRepository(ProjectScopedRepository[Script]):
    """Repository for Script model."""

    model = Script
