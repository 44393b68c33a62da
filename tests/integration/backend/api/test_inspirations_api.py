"""
Integration Tests for Inspirations API.

Tests inspiration CRUD and server-side link metadata.
"""

import pytest
from httpx import AsyncClient


class TestCreateInspiration:
    """Tests for POST /api/v1/inspirations."""

    @pytest.mark.asyncio
    async def test_youtube_link_metadata(self, client: AsyncClient, auth_headers, api):
        """Link metadata is resolved from the URL at creation."""
        response = await client.post(
            "/api/v1/inspirations",
            json={
                "title": "Pacing reference",
                "type": "link",
                "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            },
            headers=auth_headers,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["metadata"] == {
            "domain": "www.youtube.com",
            "description": "External link",
            "type": "video",
            "platform": "YouTube",
            "video_id": "dQw4w9WgXcQ",
            "thumbnail": "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        }

    @pytest.mark.asyncio
    async def test_unparseable_link_falls_back(self, client: AsyncClient, auth_headers, api):
        response = await client.post(
            "/api/v1/inspirations",
            json={"title": "Odd", "type": "link", "url": "not a url"},
            headers=auth_headers,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["metadata"] == {
            "domain": "unknown",
            "description": "External link",
            "type": "webpage",
        }

    @pytest.mark.asyncio
    async def test_non_link_has_empty_metadata(self, client: AsyncClient, auth_headers, api):
        response = await client.post(
            "/api/v1/inspirations",
            json={"title": "Moodboard", "type": "file"},
            headers=auth_headers,
        )

        assert api.assert_success(response, expected_status=201)["data"]["metadata"] == {}

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, client: AsyncClient, auth_headers, api):
        response = await client.post(
            "/api/v1/inspirations",
            json={"title": "Bad", "type": "podcast"},
            headers=auth_headers,
        )

        api.assert_validation_error(response, field="type")


class TestInspirationLifecycle:
    """Tests for list, update and delete."""

    @pytest.mark.asyncio
    async def test_update_keeps_metadata(self, client: AsyncClient, auth_headers, api):
        created = await client.post(
            "/api/v1/inspirations",
            json={"title": "Clip", "type": "link", "url": "https://www.tiktok.com/@a/video/1"},
            headers=auth_headers,
        )
        item = created.json()["data"]

        response = await client.patch(
            f"/api/v1/inspirations/{item['id']}",
            json={"title": "Renamed clip", "project_id": "project-9"},
            headers=auth_headers,
        )

        data = api.assert_success(response)["data"]
        assert data["title"] == "Renamed clip"
        assert data["project_id"] == "project-9"
        assert data["metadata"]["platform"] == "TikTok"

    @pytest.mark.asyncio
    async def test_list_filter_and_delete(self, client: AsyncClient, auth_headers, api):
        created = await client.post(
            "/api/v1/inspirations",
            json={"title": "A", "type": "link", "url": "https://x.com/a", "project_id": "p1"},
            headers=auth_headers,
        )
        await client.post(
            "/api/v1/inspirations",
            json={"title": "B", "type": "link", "url": "https://example.com"},
            headers=auth_headers,
        )
        item_id = created.json()["data"]["id"]

        filtered = await client.get(
            "/api/v1/inspirations", params={"project_id": "p1"}, headers=auth_headers
        )
        assert [i["id"] for i in api.assert_success(filtered)["data"]] == [item_id]

        response = await client.delete(f"/api/v1/inspirations/{item_id}", headers=auth_headers)
        assert response.status_code == 204

        remaining = await client.get("/api/v1/inspirations", headers=auth_headers)
        assert [i["title"] for i in remaining.json()["data"]] == ["B"]

    @pytest.mark.asyncio
    async def test_foreign_update_rejected(
        self, client: AsyncClient, auth_headers, other_auth_headers, api
    ):
        created = await client.post(
            "/api/v1/inspirations",
            json={"title": "Mine", "type": "file"},
            headers=auth_headers,
        )
        item_id = created.json()["data"]["id"]

        response = await client.patch(
            f"/api/v1/inspirations/{item_id}",
            json={"title": "Stolen"},
            headers=other_auth_headers,
        )

        api.assert_error(response, 404, "RES_NOT_FOUND")
