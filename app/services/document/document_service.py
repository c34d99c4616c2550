"""
Document Service - Main orchestration facade for document operations.

The service delegates operations to specialized services:
- DocumentCrudService: save, load, delete, exists
- DocumentQueryService: listing with derived metadata
"""

from typing import Any, List, Optional, Union

from app.core.config import Settings
from app.core.storage_client import LocalStorageClient
from app.models.document import ListingMode
from app.models.schemas import DocumentMetadata
from .document_base_service import DocumentBaseService
from .document_crud_service import DocumentCrudService
from .document_query_service import DocumentQueryService


class DocumentService(DocumentBaseService):
    """Main document service implementing facade pattern."""

    def __init__(
        self,
        storage: LocalStorageClient,
        listing_mode: Union[ListingMode, str] = ListingMode.STRICT,
    ):
        super().__init__(storage)

        self.crud_service = DocumentCrudService(storage)
        self.query_service = DocumentQueryService(storage, listing_mode)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentService":
        """Build a service bound to the configured documents directory."""
        storage = LocalStorageClient(settings.DOCUMENTS_DIR, name="documents")
        return cls(storage, listing_mode=settings.LISTING_MODE)

    def initialize(self) -> None:
        """Create the documents directory if needed."""
        self.storage.ensure_directory()

    # ========================================
    # DELEGATED CRUD METHODS
    # ========================================

    async def save_document(self, filename: str, data: Any) -> None:
        await self.crud_service.save_document(filename, data)

    async def load_document(self, filename: str) -> Any:
        return await self.crud_service.load_document(filename)

    async def delete_document(self, filename: str) -> None:
        await self.crud_service.delete_document(filename)

    async def document_exists(self, filename: str) -> bool:
        return await self.crud_service.document_exists(filename)

    # ========================================
    # DELEGATED QUERY METHODS
    # ========================================

    async def list_documents(
        self, mode: Optional[Union[ListingMode, str]] = None
    ) -> List[DocumentMetadata]:
        return await self.query_service.list_documents(mode)
