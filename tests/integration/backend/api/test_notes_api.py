"""
Integration Tests for Notes API.

Tests the note endpoints with a real database.
"""

import pytest
from httpx import AsyncClient


class TestNotesApi:
    """Tests for /api/v1/notes."""

    @pytest.mark.asyncio
    async def test_create_note_default_block(self, client: AsyncClient, auth_headers, api):
        response = await client.post(
            "/api/v1/notes", json={"title": "Research"}, headers=auth_headers
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert [b["type"] for b in data["content"]] == ["text"]
        assert data["tags"] == []

    @pytest.mark.asyncio
    async def test_create_note_with_code_block(self, client: AsyncClient, auth_headers, api):
        """Notes accept block types that scripts do not."""
        response = await client.post(
            "/api/v1/notes",
            json={
                "title": "Snippets",
                "content": [
                    {"id": "c1", "type": "code", "content": "print(1)"},
                    {"id": "q1", "type": "quote", "content": "Ship it"},
                ],
            },
            headers=auth_headers,
        )

        data = api.assert_success(response, expected_status=201)["data"]
        assert [b["type"] for b in data["content"]] == ["code", "quote"]

    @pytest.mark.asyncio
    async def test_missing_title_fails(self, client: AsyncClient, auth_headers, api):
        response = await client.post("/api/v1/notes", json={}, headers=auth_headers)

        api.assert_validation_error(response, field="title")

    @pytest.mark.asyncio
    async def test_uncategorized_notes(self, client: AsyncClient, auth_headers, api):
        await client.post(
            "/api/v1/notes",
            json={"title": "Filed", "project_id": "project-1"},
            headers=auth_headers,
        )
        await client.post("/api/v1/notes", json={"title": "Inbox"}, headers=auth_headers)

        response = await client.get("/api/v1/notes/uncategorized", headers=auth_headers)

        assert [n["title"] for n in api.assert_success(response)["data"]] == ["Inbox"]

    @pytest.mark.asyncio
    async def test_update_tags_normalized(self, client: AsyncClient, auth_headers, api):
        created = await client.post(
            "/api/v1/notes", json={"title": "Tagged"}, headers=auth_headers
        )
        note_id = created.json()["data"]["id"]

        response = await client.patch(
            f"/api/v1/notes/{note_id}",
            json={"tags": [" Ideas ", "ideas", "B-Roll"]},
            headers=auth_headers,
        )

        assert api.assert_success(response)["data"]["tags"] == ["ideas", "b-roll"]

    @pytest.mark.asyncio
    async def test_foreign_note_not_found(
        self, client: AsyncClient, auth_headers, other_auth_headers, api
    ):
        created = await client.post(
            "/api/v1/notes", json={"title": "Private"}, headers=auth_headers
        )
        note_id = created.json()["data"]["id"]

        response = await client.get(f"/api/v1/notes/{note_id}", headers=other_auth_headers)

        data = api.assert_error(response, 404, "RES_NOT_FOUND")
        assert data["error"]["message"] == "Note not found or access denied"

    @pytest.mark.asyncio
    async def test_delete_note(self, client: AsyncClient, auth_headers):
        created = await client.post(
            "/api/v1/notes", json={"title": "Temp"}, headers=auth_headers
        )
        note_id = created.json()["data"]["id"]

        response = await client.delete(f"/api/v1/notes/{note_id}", headers=auth_headers)

        assert response.status_code == 204
        listing = await client.get("/api/v1/notes", headers=auth_headers)
        assert listing.json()["data"] == []
