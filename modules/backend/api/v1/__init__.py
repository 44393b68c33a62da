"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from modules.backend.api.v1.endpoints import (
    files,
    inspirations,
    notes,
    projects,
    scripts,
    settings,
    tags,
)

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["projects"])
router.include_router(scripts.router, prefix="/scripts", tags=["scripts"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(inspirations.router, prefix="/inspirations", tags=["inspirations"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
router.include_router(files.router, prefix="/files", tags=["files"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
