"""
File Service.

Gateway between the API and the blob store: upload slots, image
inspirations, retrieval URLs and deletion.

Each blob has a StoredFile row recording who requested the upload slot,
so every blob operation can be checked against the caller. With the S3
driver clients upload straight to object storage, so a slot is marked
uploaded the first time the object is found there.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import ConflictError, NotFoundError, ValidationError
from modules.backend.core.security import decode_upload_token
from modules.backend.core.utils import utc_now
from modules.backend.models.inspiration import Inspiration
from modules.backend.models.stored_file import StoredFile
from modules.backend.repositories.inspiration import InspirationRepository
from modules.backend.repositories.stored_file import StoredFileRepository
from modules.backend.schemas.file import ImageInspirationCreate, ImageWithUrl, UploadUrlResponse
from modules.backend.services.base import BaseService
from modules.backend.storage.base import BlobStore


class FileService(BaseService):
    """Service for file uploads and image inspirations."""

    def __init__(
        self,
        session: AsyncSession,
        blob_store: BlobStore,
        max_upload_bytes: int | None = None,
    ) -> None:
        super().__init__(session)
        self.blob_store = blob_store
        self.max_upload_bytes = max_upload_bytes
        self.repo = StoredFileRepository(session)
        self.inspirations = InspirationRepository(session)

    def _check_size(self, size: int) -> None:
        if size <= 0:
            raise ValidationError("Uploaded file is empty")
        if self.max_upload_bytes is not None and size > self.max_upload_bytes:
            raise ValidationError(
                "Uploaded file is too large",
                details={"max_bytes": self.max_upload_bytes, "size": size},
            )

    async def generate_upload_url(self, user_id: str) -> UploadUrlResponse:
        """Reserve a storage id for the caller and return its upload URL."""
        stored = await self._execute_db_operation(
            "reserve_upload",
            self.repo.create(user_id=user_id, uploaded=False, created_at=utc_now()),
        )

        self._log_operation("Upload URL issued", user_id=user_id, storage_id=stored.id)
        return UploadUrlResponse(
            upload_url=self.blob_store.upload_url(user_id, stored.id),
            storage_id=stored.id,
        )

    async def upload(self, token: str, data: bytes, content_type: str | None) -> StoredFile:
        """
        Receive the bytes for a reserved upload slot (local driver).

        Raises:
            AuthenticationError: If the upload token is invalid or expired
            ConflictError: If the slot has already received a file
            ValidationError: If the file is empty or too large
        """
        user_id, storage_id = decode_upload_token(token)
        stored = await self.repo.get_owned(storage_id, user_id)

        if stored.uploaded:
            raise ConflictError("Upload URL has already been used")
        self._check_size(len(data))

        size = await self.blob_store.save(storage_id, data, content_type)
        self._log_operation("File uploaded", user_id=user_id, storage_id=storage_id, size=size)

        return await self._execute_db_operation(
            "complete_upload",
            self.repo.update(stored, uploaded=True, size=size, content_type=content_type),
        )

    async def _confirm_upload(self, stored: StoredFile) -> bool:
        """Mark a slot uploaded if its object has arrived in the store."""
        if stored.uploaded:
            return True
        info = await self.blob_store.stat(stored.id)
        if info is None:
            return False
        self._check_size(info.size)

        self._log_debug("Upload confirmed", storage_id=stored.id, size=info.size)
        await self._execute_db_operation(
            "confirm_upload",
            self.repo.update(
                stored,
                uploaded=True,
                size=info.size,
                content_type=info.content_type,
            ),
        )
        return True

    async def _get_uploaded(self, user_id: str, file_id: str) -> StoredFile:
        stored = await self.repo.get_owned(file_id, user_id)
        if not await self._confirm_upload(stored):
            raise NotFoundError("File not found or access denied")
        return stored

    async def create_image_inspiration(
        self,
        user_id: str,
        data: ImageInspirationCreate,
    ) -> Inspiration:
        """
        Register an uploaded image as an inspiration.

        Raises:
            NotFoundError: If the file was never uploaded or belongs to someone else
            ValidationError: If the uploaded object is empty or too large
        """
        await self._get_uploaded(user_id, data.file_id)

        now = utc_now()
        self._log_operation("Creating image inspiration", user_id=user_id, file_id=data.file_id)
        return await self._execute_db_operation(
            "create_image_inspiration",
            self.inspirations.create(
                user_id=user_id,
                project_id=data.project_id,
                type="image",
                title=data.title,
                file_id=data.file_id,
                metadata_=data.metadata.model_dump(exclude_none=True),
                tags=list(data.tags),
                created_at=now,
                updated_at=now,
            ),
        )

    async def get_file_url(self, user_id: str, file_id: str) -> str | None:
        """Retrieval URL for one of the caller's files, or None if there is none."""
        stored = await self.repo.get_by_id_or_none(file_id)
        if stored is None or stored.user_id != user_id:
            return None
        if not stored.uploaded and await self.blob_store.stat(file_id) is None:
            return None
        return self.blob_store.get_url(file_id)

    async def delete_file(
        self,
        user_id: str,
        file_id: str,
        inspiration_id: str | None = None,
    ) -> None:
        """
        Delete one of the caller's files, and optionally its inspiration.

        When ``inspiration_id`` is given, that inspiration must belong to
        the caller and reference this very file. The rows are committed
        before the blob is removed, so a failed commit never leaves a row
        pointing at a deleted blob.

        Raises:
            NotFoundError: If the file or inspiration is missing or foreign
            ValidationError: If the inspiration references a different file
            StorageError: If the rows were deleted but the blob could not be
        """
        stored = await self.repo.get_owned(file_id, user_id)

        if inspiration_id:
            inspiration = await self.inspirations.get_owned(inspiration_id, user_id)
            if inspiration.file_id != file_id:
                raise ValidationError(
                    "Inspiration does not reference this file",
                    details={"inspiration_id": inspiration_id, "file_id": file_id},
                )
            await self._execute_db_operation(
                "delete_inspiration",
                self.inspirations.delete(inspiration),
            )

        self._log_operation(
            "Deleting file",
            user_id=user_id,
            file_id=file_id,
            inspiration_id=inspiration_id,
        )
        await self._execute_db_operation("delete_file", self.repo.delete(stored))
        await self._execute_db_operation("commit_delete_file", self.session.commit())
        await self.blob_store.delete(file_id)

    async def get_user_images(self, user_id: str) -> list[ImageWithUrl]:
        """Caller's image inspirations, newest first, with file URLs resolved."""
        images = await self.inspirations.list_by_type(user_id, "image")
        result = []
        for image in images:
            item = ImageWithUrl.model_validate(image)
            if image.file_id:
                item.file_url = await self.get_file_url(user_id, image.file_id)
            result.append(item)
        return result

    async def read_file(self, file_id: str) -> tuple[bytes, str | None]:
        """
        Read an uploaded file for download.

        Retrieval URLs are capability URLs (unguessable ids), so no
        caller identity is required here.

        Raises:
            NotFoundError: If no uploaded file has this id
        """
        stored = await self.repo.get_by_id_or_none(file_id)
        if stored is None or not stored.uploaded:
            raise NotFoundError("File not found")
        data = await self.blob_store.read(file_id)
        return data, stored.content_type
