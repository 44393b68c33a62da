"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database, a real blob
directory and real token signing. These fixtures build on the root
conftest.py database and secrets fixtures.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.core.dependencies import get_blob_store
from modules.backend.storage.local import LocalBlobStore

TEST_BASE_URL = "http://test"
FILES_BASE_URL = f"{TEST_BASE_URL}/api/v1/files"


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def blob_store(tmp_path: Path) -> LocalBlobStore:
    """Blob store writing into the test's temporary directory."""
    return LocalBlobStore(root=tmp_path / "blobs", public_base_url=FILES_BASE_URL)


@pytest.fixture
async def client(
    db_session: AsyncSession,
    blob_store: LocalBlobStore,
    test_secrets: Any,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session and blob store overrides.

    Every request in a test shares the test's session, which is rolled
    back afterwards.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from modules.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url=TEST_BASE_URL,
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


def _bearer(user_id: str) -> dict[str, str]:
    from modules.backend.core.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def auth_headers(test_secrets: Any) -> dict[str, str]:
    """
    Authorization headers for the primary test user, ``user-a``.

    Usage:
        async def test_list_projects(client: AsyncClient, auth_headers: dict):
            response = await client.get("/api/v1/projects", headers=auth_headers)
            assert response.status_code == 200
    """
    return _bearer("user-a")


@pytest.fixture
def other_auth_headers(test_secrets: Any) -> dict[str, str]:
    """Authorization headers for a second user, ``user-b``."""
    return _bearer("user-b")


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
