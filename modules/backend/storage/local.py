"""
Local Filesystem Blob Store.

Development and test driver (``driver: local`` in storage.yaml). Stores
blobs as files under a root directory; URLs point back at the API's own
/files routes, with the upload slot carried in a signed upload token.
"""

import asyncio
from pathlib import Path

from modules.backend.core.exceptions import StorageError
from modules.backend.core.logging import get_logger
from modules.backend.core.security import create_upload_token
from modules.backend.storage.base import BlobInfo, BlobStore

logger = get_logger(__name__)


class LocalBlobStore(BlobStore):
    """
    Blob store backed by a directory.

    Storage ids are generated server-side (UUIDs), but are still checked
    so a crafted id can never escape the root directory.
    """

    def __init__(self, root: Path, public_base_url: str) -> None:
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _path(self, storage_id: str) -> Path:
        if not storage_id or "/" in storage_id or "\\" in storage_id or storage_id.startswith("."):
            raise StorageError("Invalid storage id")
        return self.root / storage_id

    async def save(self, storage_id: str, data: bytes, content_type: str | None = None) -> int:
        path = self._path(storage_id)
        try:
            await asyncio.to_thread(self.root.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            logger.error("Blob write failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to store file") from e
        logger.debug("Blob stored", extra={"storage_id": storage_id, "size": len(data)})
        return len(data)

    async def read(self, storage_id: str) -> bytes:
        path = self._path(storage_id)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise StorageError("File not found in storage") from e
        except OSError as e:
            logger.error("Blob read failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to read file") from e

    async def stat(self, storage_id: str) -> BlobInfo | None:
        path = self._path(storage_id)
        try:
            result = await asyncio.to_thread(path.stat)
        except FileNotFoundError:
            return None
        return BlobInfo(size=result.st_size)

    async def delete(self, storage_id: str) -> None:
        path = self._path(storage_id)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            logger.error("Blob delete failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to delete file") from e
        logger.debug("Blob deleted", extra={"storage_id": storage_id})

    def get_url(self, storage_id: str) -> str:
        return f"{self.public_base_url}/{storage_id}"

    def upload_url(self, user_id: str, storage_id: str) -> str:
        return f"{self.public_base_url}/upload/{create_upload_token(user_id, storage_id)}"
