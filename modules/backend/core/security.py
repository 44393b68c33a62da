"""
Security Utilities.

Caller identity and signed upload tokens.

Identities are issued by an external provider; this module only verifies
bearer tokens and reads the subject claim. create_access_token exists for
tooling and tests that need a valid token.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from modules.backend.core.config import get_app_config, get_settings
from modules.backend.core.exceptions import AuthenticationError
from modules.backend.core.logging import get_logger
from modules.backend.core.utils import utc_now

logger = get_logger(__name__)

UPLOAD_TOKEN_TYPE = "upload"
ACCESS_TOKEN_TYPE = "access"


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token for a user.

    Args:
        subject: User identifier stored in the ``sub`` claim
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode = {
        "sub": subject,
        "exp": expire,
        "type": ACCESS_TOKEN_TYPE,
        "aud": jwt_config.audience,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string
        expected_type: Required value of the ``type`` claim

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid, expired or of the wrong type
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")

    if payload.get("type") != expected_type or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")
    return payload


def get_user_id_from_token(token: str) -> str:
    """Return the caller identity (``sub`` claim) of an access token."""
    return decode_token(token)["sub"]


def create_upload_token(user_id: str, storage_id: str) -> str:
    """
    Create a short-lived token authorizing one blob upload.

    The token is embedded in the upload URL, so the upload request itself
    needs no Authorization header.
    """
    settings = get_settings()
    app_config = get_app_config()
    jwt_config = app_config.security.jwt
    expire = utc_now() + timedelta(minutes=app_config.storage.upload_url_expire_minutes)

    to_encode = {
        "sub": user_id,
        "sid": storage_id,
        "exp": expire,
        "type": UPLOAD_TOKEN_TYPE,
        "aud": jwt_config.audience,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def decode_upload_token(token: str) -> tuple[str, str]:
    """
    Validate an upload token.

    Returns:
        Tuple of (user_id, storage_id)

    Raises:
        AuthenticationError: If the token is invalid or expired
    """
    payload = decode_token(token, expected_type=UPLOAD_TOKEN_TYPE)
    storage_id = payload.get("sid")
    if not storage_id:
        raise AuthenticationError("Invalid upload token")
    return payload["sub"], storage_id
