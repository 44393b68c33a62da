"""
Unit Tests for the link metadata resolver.
"""

import pytest

from modules.backend.services.link_metadata import (
    DEFAULT_DESCRIPTION,
    fallback_metadata,
    resolve_link_metadata,
)


class TestYouTube:
    """YouTube links carry a video id and thumbnail when one can be found."""

    def test_watch_url(self):
        metadata = resolve_link_metadata("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10")

        assert metadata["platform"] == "YouTube"
        assert metadata["type"] == "video"
        assert metadata["domain"] == "www.youtube.com"
        assert metadata["video_id"] == "dQw4w9WgXcQ"
        assert metadata["thumbnail"] == "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"

    def test_short_link(self):
        metadata = resolve_link_metadata("https://youtu.be/abc123?si=share")

        assert metadata["platform"] == "YouTube"
        assert metadata["video_id"] == "abc123"

    def test_shorts_path(self):
        metadata = resolve_link_metadata("https://youtube.com/shorts/xyz789")

        assert metadata["video_id"] == "xyz789"

    def test_channel_page_has_no_thumbnail(self):
        metadata = resolve_link_metadata("https://www.youtube.com/@somechannel")

        assert metadata["platform"] == "YouTube"
        assert "video_id" not in metadata
        assert "thumbnail" not in metadata


class TestPlatforms:
    """Hostname rules for the other recognised platforms."""

    @pytest.mark.parametrize(
        "url,platform,content_type",
        [
            ("https://www.instagram.com/p/Cabc/", "Instagram", "social"),
            ("https://twitter.com/user/status/1", "Twitter/X", "social"),
            ("https://x.com/user/status/1", "Twitter/X", "social"),
            ("https://www.tiktok.com/@user/video/1", "TikTok", "video"),
        ],
    )
    def test_recognised(self, url, platform, content_type):
        metadata = resolve_link_metadata(url)

        assert metadata["platform"] == platform
        assert metadata["type"] == content_type
        assert metadata["description"] == DEFAULT_DESCRIPTION

    def test_lookalike_domain_is_plain_webpage(self):
        metadata = resolve_link_metadata("https://www.dropbox.com/s/file")

        assert metadata["type"] == "webpage"
        assert "platform" not in metadata

    def test_generic_webpage(self):
        metadata = resolve_link_metadata("https://example.com/article")

        assert metadata == {
            "domain": "example.com",
            "description": DEFAULT_DESCRIPTION,
            "type": "webpage",
        }


class TestFallback:
    """Input that is not an absolute URL."""

    @pytest.mark.parametrize("url", ["not a url", "", "example.com/path", "http://[::1"])
    def test_unparseable(self, url):
        assert resolve_link_metadata(url) == fallback_metadata()

    def test_fallback_shape(self):
        assert fallback_metadata()["domain"] == "unknown"
        assert fallback_metadata()["type"] == "webpage"
