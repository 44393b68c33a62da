"""
Link Metadata Resolver.

Derives descriptive metadata for a saved link from the URL alone.
No network request is made: platform, type and thumbnail come from
static hostname rules.
"""

from typing import Any
from urllib.parse import parse_qs, urlsplit

DEFAULT_DESCRIPTION = "External link"
YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

# Ordered rules: first match wins.
# (domains, content type, platform name)
PLATFORM_RULES: list[tuple[tuple[str, ...], str, str]] = [
    (("youtube.com", "youtu.be"), "video", "YouTube"),
    (("instagram.com",), "social", "Instagram"),
    (("twitter.com", "x.com"), "social", "Twitter/X"),
    (("tiktok.com",), "video", "TikTok"),
]

# youtube.com paths that carry the video id as the next segment
_YOUTUBE_ID_PATHS = {"shorts", "embed", "live"}


def _matches_domain(hostname: str, domain: str) -> bool:
    """True for the domain itself or any subdomain of it."""
    return hostname == domain or hostname.endswith("." + domain)


def _youtube_video_id(hostname: str, path: str, query: str) -> str:
    segments = [segment for segment in path.split("/") if segment]

    if _matches_domain(hostname, "youtu.be"):
        return segments[0] if segments else ""

    video_ids = parse_qs(query).get("v")
    if video_ids and video_ids[0]:
        return video_ids[0]
    if len(segments) >= 2 and segments[0] in _YOUTUBE_ID_PATHS:
        return segments[1]
    return ""


def fallback_metadata() -> dict[str, Any]:
    """Metadata for a URL that cannot be parsed."""
    return {
        "domain": "unknown",
        "description": DEFAULT_DESCRIPTION,
        "type": "webpage",
    }


def resolve_link_metadata(url: str) -> dict[str, Any]:
    """
    Resolve metadata for a link.

    Args:
        url: Absolute URL as entered by the user

    Returns:
        Dict with ``domain``, ``description`` and ``type`` (video, social or
        webpage); recognised platforms add ``platform``, and YouTube links
        with a video id add ``video_id`` and ``thumbnail``. Unparseable
        input yields the fallback record with domain "unknown".

    Example:
        >>> resolve_link_metadata("https://youtu.be/abc123")["thumbnail"]
        'https://img.youtube.com/vi/abc123/maxresdefault.jpg'
    """
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return fallback_metadata()

    if not parts.scheme or not hostname:
        return fallback_metadata()

    metadata: dict[str, Any] = {
        "domain": hostname,
        "description": DEFAULT_DESCRIPTION,
    }

    for domains, content_type, platform in PLATFORM_RULES:
        if any(_matches_domain(hostname, domain) for domain in domains):
            metadata["type"] = content_type
            metadata["platform"] = platform
            break
    else:
        metadata["type"] = "webpage"
        return metadata

    if metadata["platform"] == "YouTube":
        video_id = _youtube_video_id(hostname, parts.path, parts.query)
        if video_id:
            metadata["video_id"] = video_id
            metadata["thumbnail"] = YOUTUBE_THUMBNAIL_URL.format(video_id=video_id)

    return metadata
