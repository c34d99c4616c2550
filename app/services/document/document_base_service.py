"""
Document Base Service - Common utilities and shared functionality.

This service provides the foundation for all document services with:
- Access to the documents directory storage client
- Shared logging
- Translation of storage client failures into application errors
"""

from app.core.exceptions import StorageError
from app.core.logging import get_service_logger
from app.core.storage_client import LocalStorageClient, StorageClientError


class DocumentBaseService:
    """Base service with common functionality shared across all document services."""

    def __init__(self, storage: LocalStorageClient):
        """Initialize base service with the documents storage client."""
        self.storage = storage
        self.logger = get_service_logger("document")

    def _storage_failure(
        self, public_message: str, operation: str, error: StorageClientError
    ) -> StorageError:
        """Log a storage client failure and wrap it with a generic client message."""
        self.logger.error(
            f"Document {operation} failed",
            filename=error.filename,
            error=str(error.cause),
            error_type=type(error.cause).__name__,
        )
        return StorageError(public_message, reason=str(error.cause))
