"""
Document CRUD Service - Single-document operations on the documents directory.

- Save: pretty-printed JSON, overwriting any previous content
- Load: read and parse
- Delete: remove, failing when the document is missing
- Exists: presence check that never fails for a missing document
"""

import json
from typing import Any

from app.core.exceptions import StorageError
from app.core.storage_client import StorageClientError
from app.models.document import serialize_document
from .document_base_service import DocumentBaseService

SAVE_ERROR_MESSAGE = "Error saving the file"
LOAD_ERROR_MESSAGE = "Error loading file"
DELETE_ERROR_MESSAGE = "Error deleting the file"


class DocumentCrudService(DocumentBaseService):
    """Service for basic document CRUD operations."""

    async def save_document(self, filename: str, data: Any) -> None:
        """
        Serialize ``data`` and write it to ``filename``.

        Args:
            filename: Document filename
            data: Any JSON-serializable value

        Raises:
            InvalidFilenameError: If the filename is not usable
            StorageError: If the document could not be written
        """
        content = serialize_document(data)

        try:
            await self.storage.write_text_async(filename, content)
        except StorageClientError as e:
            raise self._storage_failure(SAVE_ERROR_MESSAGE, "save", e)

        self.logger.info("Document saved", filename=filename, size=len(content))

    async def load_document(self, filename: str) -> Any:
        """
        Read and parse a stored document.

        A missing, unreadable or corrupt document is reported the same way.

        Raises:
            InvalidFilenameError: If the filename is not usable
            StorageError: If the document could not be read or parsed
        """
        try:
            content = await self.storage.read_text_async(filename)
        except StorageClientError as e:
            raise self._storage_failure(LOAD_ERROR_MESSAGE, "load", e)

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            self.logger.error(
                "Stored document is not valid JSON", filename=filename, error=str(e)
            )
            raise StorageError(LOAD_ERROR_MESSAGE, reason=str(e))

        self.logger.info("Document loaded", filename=filename)
        return data

    async def delete_document(self, filename: str) -> None:
        """
        Remove a stored document.

        Raises:
            InvalidFilenameError: If the filename is not usable
            StorageError: If the document could not be removed, including
                when it does not exist
        """
        try:
            await self.storage.delete_async(filename)
        except StorageClientError as e:
            raise self._storage_failure(DELETE_ERROR_MESSAGE, "delete", e)

        self.logger.info("Document deleted", filename=filename)

    async def document_exists(self, filename: str) -> bool:
        """Check whether a document is present without reading it."""
        exists = await self.storage.exists_async(filename)
        self.logger.debug("Document existence checked", filename=filename, exists=exists)
        return exists
