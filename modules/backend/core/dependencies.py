"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.core.exceptions import AuthenticationError
from modules.backend.core.logging import get_logger
from modules.backend.core.security import get_user_id_from_token
from modules.backend.storage.base import BlobStore

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """
    Resolve the caller identity from the bearer token.

    Raises:
        AuthenticationError: If no token is present or it does not verify
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return get_user_id_from_token(credentials.credentials)


CurrentUserId = Annotated[str, Depends(get_current_user_id)]


@lru_cache
def get_blob_store() -> BlobStore:
    """Get the blob store selected by ``driver`` in storage.yaml (cached for the process)."""
    from modules.backend.core.config import find_project_root, get_app_config, get_settings

    storage = get_app_config().storage
    if storage.driver == "local":
        from modules.backend.storage.local import LocalBlobStore

        logger.warning("Using local blob store", extra={"root": storage.local.root})
        return LocalBlobStore(
            root=find_project_root() / storage.local.root,
            public_base_url=storage.local.public_base_url,
        )

    from modules.backend.storage.s3 import S3BlobStore, create_s3_client

    settings = get_settings()
    return S3BlobStore(
        client=create_s3_client(
            storage.s3,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
        ),
        bucket=storage.s3.bucket,
        upload_expires_in=storage.upload_url_expire_minutes * 60,
        download_expires_in=storage.download_url_expire_minutes * 60,
    )


Blobs = Annotated[BlobStore, Depends(get_blob_store)]
