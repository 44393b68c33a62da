"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone
from uuid import uuid4


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive
    and assumed to be UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Generate a random string identifier (records, blocks, blobs)."""
    return str(uuid4())


def normalize_tag_name(name: str) -> str:
    """Canonical form of a tag name: stripped and lower-cased."""
    return name.strip().lower()


def normalize_tags(tags: list[str]) -> list[str]:
    """
    Normalize a tag list, dropping blanks and duplicates.

    First occurrence wins so the user's ordering is kept.
    """
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        name = normalize_tag_name(tag)
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result
