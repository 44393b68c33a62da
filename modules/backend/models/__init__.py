# Import all models so they register on Base.metadata
from modules.backend.models.base import Base
from modules.backend.models.inspiration import Inspiration
from modules.backend.models.note import Note
from modules.backend.models.project import Project
from modules.backend.models.script import Script
from modules.backend.models.stored_file import StoredFile
from modules.backend.models.tag import Tag
from modules.backend.models.user_settings import UserSettings

__all__ = [
    "Base",
    "Inspiration",
    "Note",
    "Project",
    "Script",
    "StoredFile",
    "Tag",
    "UserSettings",
]
