"""
Unit Tests for Security Module.

Black box tests against the public interface of security.py.
JWT operations execute for real. Only the config boundary is stubbed
with real Pydantic schema objects.
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from jose import jwt

from modules.backend.core.config_schema import JwtSchema
from modules.backend.core.exceptions import AuthenticationError
from modules.backend.core.security import (
    create_access_token,
    create_upload_token,
    decode_token,
    decode_upload_token,
    get_user_id_from_token,
)

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-testing-purposes"


@pytest.fixture
def jwt_config():
    """Real Pydantic JwtSchema with test values."""
    return JwtSchema(
        algorithm="HS256",
        access_token_expire_minutes=30,
        audience="test-api",
    )


@pytest.fixture(autouse=True)
def _stub_config(jwt_config):
    """Stub the config boundary so security functions can resolve settings."""
    settings = SimpleNamespace(jwt_secret=TEST_JWT_SECRET)
    app_config = SimpleNamespace(
        security=SimpleNamespace(jwt=jwt_config),
        storage=SimpleNamespace(upload_url_expire_minutes=15),
    )
    with (
        patch("modules.backend.core.security.get_settings", return_value=settings),
        patch("modules.backend.core.security.get_app_config", return_value=app_config),
    ):
        yield


class TestAccessTokens:
    """Tests for access token creation and caller identity."""

    def test_round_trip_subject(self):
        token = create_access_token("user-a")

        assert get_user_id_from_token(token) == "user-a"

    def test_payload_claims(self):
        payload = decode_token(create_access_token("user-a"))

        assert payload["type"] == "access"
        assert payload["aud"] == "test-api"
        assert "exp" in payload

    def test_custom_expiration_delta(self):
        short = decode_token(create_access_token("u", timedelta(minutes=1)))
        default = decode_token(create_access_token("u"))

        assert short["exp"] < default["exp"]


class TestDecodeToken:
    """Rejected tokens all surface as AuthenticationError."""

    @pytest.mark.parametrize("token", ["garbage", ""])
    def test_malformed(self, token):
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_wrong_secret(self, jwt_config):
        token = jwt.encode(
            {"sub": "user-a", "type": "access", "aud": "test-api"},
            "some-other-secret",
            algorithm=jwt_config.algorithm,
        )

        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_expired(self):
        token = create_access_token("user-a", timedelta(minutes=-5))

        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_wrong_audience(self, jwt_config):
        token = jwt.encode(
            {"sub": "user-a", "type": "access", "aud": "elsewhere"},
            TEST_JWT_SECRET,
            algorithm=jwt_config.algorithm,
        )

        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_missing_subject(self, jwt_config):
        token = jwt.encode(
            {"type": "access", "aud": "test-api"},
            TEST_JWT_SECRET,
            algorithm=jwt_config.algorithm,
        )

        with pytest.raises(AuthenticationError):
            decode_token(token)


class TestUploadTokens:
    """Upload tokens authorize one slot and are not access tokens."""

    def test_round_trip(self):
        token = create_upload_token("user-a", "file-1")

        assert decode_upload_token(token) == ("user-a", "file-1")

    def test_upload_token_is_not_an_access_token(self):
        token = create_upload_token("user-a", "file-1")

        with pytest.raises(AuthenticationError):
            get_user_id_from_token(token)

    def test_access_token_is_not_an_upload_token(self):
        with pytest.raises(AuthenticationError):
            decode_upload_token(create_access_token("user-a"))

    def test_missing_storage_id(self, jwt_config):
        token = jwt.encode(
            {"sub": "user-a", "type": "upload", "aud": "test-api"},
            TEST_JWT_SECRET,
            algorithm=jwt_config.algorithm,
        )

        with pytest.raises(AuthenticationError):
            decode_upload_token(token)
