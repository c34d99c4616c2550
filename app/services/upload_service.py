"""
Map Upload Service - stores uploaded map images under generated names.

Images are written as-is to the maps directory as ``YYYYMMDD_HHMMSS<ext>``
using local wall-clock time; two uploads in the same second share a name and
the later one wins.
"""

import os
from datetime import datetime
from typing import Callable, Iterable, Optional

from fastapi import UploadFile

from app.core.config import Settings
from app.core.exceptions import StorageError, UploadValidationError
from app.core.logging import get_service_logger
from app.core.storage_client import LocalStorageClient, StorageClientError
from app.models.schemas import MapUploadResponse

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

NO_FILE_MESSAGE = "No file uploaded"
DISALLOWED_TYPE_MESSAGE = "Only images are allowed!"
UPLOAD_ERROR_MESSAGE = "Error saving the uploaded file"


class MapUploadService:
    """Validate and persist uploaded map images."""

    def __init__(
        self,
        storage: LocalStorageClient,
        allowed_types: Iterable[str],
        url_prefix: str = "/maps",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.allowed_types = frozenset(allowed_types)
        self.url_prefix = url_prefix.rstrip("/")
        self.clock = clock
        self.logger = get_service_logger("upload")

    @classmethod
    def from_settings(cls, settings: Settings) -> "MapUploadService":
        storage = LocalStorageClient(settings.MAPS_DIR, name="maps")
        return cls(
            storage,
            allowed_types=settings.ALLOWED_IMAGE_TYPES,
            url_prefix=settings.MAPS_URL_PREFIX,
        )

    def initialize(self) -> None:
        """Create the maps directory if needed."""
        self.storage.ensure_directory()

    def generate_filename(self, original_filename: str) -> str:
        """Timestamped name keeping the original extension, leading dot included."""
        _, ext = os.path.splitext(os.path.basename(original_filename))
        return f"{self.clock().strftime(TIMESTAMP_FORMAT)}{ext}"

    def _validate_upload(self, file: Optional[UploadFile]) -> UploadFile:
        """
        Reject missing files and disallowed MIME types.

        Raises:
            UploadValidationError: If nothing may be written
        """
        if file is None:
            raise UploadValidationError(NO_FILE_MESSAGE)

        if file.content_type not in self.allowed_types:
            self.logger.warning(
                "Rejected upload with disallowed content type",
                filename=file.filename,
                content_type=file.content_type,
            )
            raise UploadValidationError(
                DISALLOWED_TYPE_MESSAGE,
                details={
                    "content_type": file.content_type,
                    "allowed_types": sorted(self.allowed_types),
                },
            )

        return file

    async def upload_map(self, file: Optional[UploadFile]) -> MapUploadResponse:
        """
        Validate and store one uploaded image.

        Args:
            file: The multipart ``file`` field, or None when it was not sent

        Returns:
            MapUploadResponse with the public path of the stored image

        Raises:
            UploadValidationError: Missing file or disallowed MIME type
            InvalidFilenameError: If the original extension is not usable
            StorageError: If the image could not be written
        """
        file = self._validate_upload(file)
        saved_name = self.generate_filename(file.filename or "")

        try:
            content = await file.read()
        finally:
            await file.close()

        try:
            await self.storage.write_bytes_async(saved_name, content)
        except StorageClientError as e:
            self.logger.error(
                "Failed to store uploaded map",
                filename=file.filename,
                saved_name=saved_name,
                error=str(e.cause),
            )
            raise StorageError(UPLOAD_ERROR_MESSAGE, reason=str(e.cause))

        self.logger.info(
            "Map uploaded",
            original_filename=file.filename,
            saved_name=saved_name,
            content_type=file.content_type,
            size=len(content),
        )

        return MapUploadResponse(map_file=f"{self.url_prefix}/{saved_name}")
