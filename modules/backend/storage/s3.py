"""
S3 Blob Store.

Object storage on any S3-compatible service (AWS S3, MinIO, R2) through
boto3. Clients upload straight to the service with a presigned PUT URL
and read through presigned GET URLs; the API never proxies the bytes.

boto3 is synchronous, so every network call runs in a worker thread.
"""

import asyncio
from typing import Any

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from modules.backend.core.config_schema import S3StorageSchema
from modules.backend.core.exceptions import StorageError
from modules.backend.core.logging import get_logger
from modules.backend.storage.base import BlobInfo, BlobStore

logger = get_logger(__name__)

MISSING_OBJECT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def create_s3_client(config: S3StorageSchema, access_key_id: str = "", secret_access_key: str = "") -> Any:
    """
    Build a boto3 S3 client with SigV4 signing.

    Empty keys fall back to boto3's default credential chain
    (environment, shared config, instance role).
    """
    return boto3.client(
        "s3",
        endpoint_url=config.endpoint_url,
        region_name=config.region,
        aws_access_key_id=access_key_id or None,
        aws_secret_access_key=secret_access_key or None,
        config=Config(signature_version="s3v4"),
    )


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3BlobStore(BlobStore):
    """Blob store backed by one S3 bucket; storage ids are object keys."""

    def __init__(
        self,
        client: Any,
        bucket: str,
        upload_expires_in: int,
        download_expires_in: int,
    ) -> None:
        self.client = client
        self.bucket = bucket
        self.upload_expires_in = upload_expires_in
        self.download_expires_in = download_expires_in

    async def _call(self, operation: str, storage_id: str, **params: Any) -> Any:
        try:
            return await asyncio.to_thread(
                getattr(self.client, operation),
                Bucket=self.bucket,
                Key=storage_id,
                **params,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Object storage call failed",
                extra={"operation": operation, "storage_id": storage_id, "error": str(e)},
            )
            raise StorageError(f"Object storage {operation} failed") from e

    def _presign(self, operation: str, storage_id: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                operation,
                Params={"Bucket": self.bucket, "Key": storage_id},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Presigning failed",
                extra={"operation": operation, "storage_id": storage_id, "error": str(e)},
            )
            raise StorageError("Could not sign storage URL") from e

    async def save(self, storage_id: str, data: bytes, content_type: str | None = None) -> int:
        params: dict[str, Any] = {"Body": data}
        if content_type:
            params["ContentType"] = content_type
        await self._call("put_object", storage_id, **params)
        logger.debug("Object stored", extra={"storage_id": storage_id, "size": len(data)})
        return len(data)

    async def read(self, storage_id: str) -> bytes:
        try:
            response = await asyncio.to_thread(
                self.client.get_object, Bucket=self.bucket, Key=storage_id
            )
            return await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            if _error_code(e) in MISSING_OBJECT_CODES:
                raise StorageError("File not found in storage") from e
            logger.error("Object read failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to read file") from e
        except BotoCoreError as e:
            logger.error("Object read failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to read file") from e

    async def stat(self, storage_id: str) -> BlobInfo | None:
        try:
            head = await asyncio.to_thread(
                self.client.head_object, Bucket=self.bucket, Key=storage_id
            )
        except ClientError as e:
            if _error_code(e) in MISSING_OBJECT_CODES:
                return None
            logger.error("Object lookup failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to look up file") from e
        except BotoCoreError as e:
            logger.error("Object lookup failed", extra={"storage_id": storage_id, "error": str(e)})
            raise StorageError("Failed to look up file") from e
        return BlobInfo(size=head["ContentLength"], content_type=head.get("ContentType"))

    async def delete(self, storage_id: str) -> None:
        await self._call("delete_object", storage_id)
        logger.debug("Object deleted", extra={"storage_id": storage_id})

    def get_url(self, storage_id: str) -> str:
        return self._presign("get_object", storage_id, self.download_expires_in)

    def upload_url(self, user_id: str, storage_id: str) -> str:
        return self._presign("put_object", storage_id, self.upload_expires_in)
