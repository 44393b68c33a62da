"""
Integration Tests for Scripts API.

Tests the script endpoints, block content and the inbox view.
"""

import pytest
from httpx import AsyncClient


class TestCreateScript:
    """Tests for POST /api/v1/scripts."""

    @pytest.mark.asyncio
    async def test_create_script_default_block(self, client: AsyncClient, auth_headers, api):
        """A script created without content gets one empty text block."""
        response = await client.post(
            "/api/v1/scripts", json={"title": "Intro"}, headers=auth_headers
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert len(data["content"]) == 1
        block = data["content"][0]
        assert block["type"] == "text"
        assert block["content"] == ""
        assert block["id"]
        assert data["project_id"] is None
        assert data["created_at"] == data["updated_at"]

    @pytest.mark.asyncio
    async def test_create_script_with_blocks(self, client: AsyncClient, auth_headers, api):
        blocks = [
            {"id": "b1", "type": "heading", "content": "Hook", "metadata": {"level": 2}},
            {"id": "b2", "type": "bullet", "content": "Say hi"},
        ]

        response = await client.post(
            "/api/v1/scripts",
            json={"title": "Outline", "content": blocks},
            headers=auth_headers,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert data["content"][0]["metadata"] == {"level": 2}
        assert [b["id"] for b in data["content"]] == ["b1", "b2"]

    @pytest.mark.asyncio
    async def test_create_script_rejects_note_only_block(
        self, client: AsyncClient, auth_headers, api
    ):
        """Scripts do not accept code blocks."""
        response = await client.post(
            "/api/v1/scripts",
            json={"title": "Bad", "content": [{"id": "b1", "type": "code", "content": "x"}]},
            headers=auth_headers,
        )

        api.assert_validation_error(response, field="content")


class TestListScripts:
    """Tests for GET /api/v1/scripts and /api/v1/scripts/uncategorized."""

    @pytest.mark.asyncio
    async def test_filter_by_project(self, client: AsyncClient, auth_headers, api):
        await client.post(
            "/api/v1/scripts",
            json={"title": "Filed", "project_id": "project-1"},
            headers=auth_headers,
        )
        await client.post("/api/v1/scripts", json={"title": "Loose"}, headers=auth_headers)

        filtered = await client.get(
            "/api/v1/scripts", params={"project_id": "project-1"}, headers=auth_headers
        )
        everything = await client.get("/api/v1/scripts", headers=auth_headers)

        assert [s["title"] for s in api.assert_success(filtered)["data"]] == ["Filed"]
        assert len(api.assert_success(everything)["data"]) == 2

    @pytest.mark.asyncio
    async def test_uncategorized(self, client: AsyncClient, auth_headers, other_auth_headers, api):
        await client.post(
            "/api/v1/scripts",
            json={"title": "Filed", "project_id": "project-1"},
            headers=auth_headers,
        )
        await client.post("/api/v1/scripts", json={"title": "Inbox"}, headers=auth_headers)
        await client.post("/api/v1/scripts", json={"title": "Not mine"}, headers=other_auth_headers)

        response = await client.get("/api/v1/scripts/uncategorized", headers=auth_headers)

        assert [s["title"] for s in api.assert_success(response)["data"]] == ["Inbox"]


class TestUpdateDeleteScript:
    """Tests for PATCH/DELETE /api/v1/scripts/{script_id}."""

    @pytest.mark.asyncio
    async def test_move_to_inbox(self, client: AsyncClient, auth_headers, api):
        """Sending project_id null files the script back into the inbox."""
        created = await client.post(
            "/api/v1/scripts",
            json={"title": "Filed", "project_id": "project-1"},
            headers=auth_headers,
        )
        script_id = created.json()["data"]["id"]

        response = await client.patch(
            f"/api/v1/scripts/{script_id}", json={"project_id": None}, headers=auth_headers
        )

        assert api.assert_success(response)["data"]["project_id"] is None
        inbox = await client.get("/api/v1/scripts/uncategorized", headers=auth_headers)
        assert [s["id"] for s in inbox.json()["data"]] == [script_id]

    @pytest.mark.asyncio
    async def test_replace_content(self, client: AsyncClient, auth_headers, api):
        created = await client.post(
            "/api/v1/scripts", json={"title": "Draft"}, headers=auth_headers
        )
        script_id = created.json()["data"]["id"]

        response = await client.patch(
            f"/api/v1/scripts/{script_id}",
            json={"content": [{"id": "new", "type": "divider"}]},
            headers=auth_headers,
        )

        data = api.assert_success(response)["data"]
        assert data["content"] == [{"id": "new", "type": "divider", "content": "", "metadata": None}]
        assert data["title"] == "Draft"

    @pytest.mark.asyncio
    async def test_delete_script(self, client: AsyncClient, auth_headers, other_auth_headers, api):
        created = await client.post(
            "/api/v1/scripts", json={"title": "Temp"}, headers=auth_headers
        )
        script_id = created.json()["data"]["id"]

        foreign = await client.delete(f"/api/v1/scripts/{script_id}", headers=other_auth_headers)
        api.assert_error(foreign, 404, "RES_NOT_FOUND")

        response = await client.delete(f"/api/v1/scripts/{script_id}", headers=auth_headers)
        assert response.status_code == 204

        gone = await client.get(f"/api/v1/scripts/{script_id}", headers=auth_headers)
        api.assert_error(gone, 404, "RES_NOT_FOUND")
