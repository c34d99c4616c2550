"""
Document Query Service - Directory-wide document listing with derived metadata.

Every document is read, parsed and stat'ed concurrently; results keep the
directory listing order. In strict mode one unreadable document fails the
whole listing, in best-effort mode it is reported on its own entry.
"""

import asyncio
import json
from typing import List, Optional, Union

from app.core.exceptions import InvalidFilenameError, StorageError
from app.core.storage_client import StorageClientError
from app.models.document import ListingMode, count_cp_entries, format_modified
from app.models.schemas import DocumentMetadata
from .document_base_service import DocumentBaseService

LIST_ERROR_MESSAGE = "Error reading files"
METADATA_ERROR_MESSAGE = "Error getting file metadata"

# JSONDecodeError is a ValueError
SUMMARY_ERRORS = (StorageClientError, InvalidFilenameError, ValueError)


class DocumentSummaryError(Exception):
    """A single document could not be read, parsed or stat'ed."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class DocumentQueryService(DocumentBaseService):
    """Service for listing documents with their metadata."""

    def __init__(self, storage, listing_mode: Union[ListingMode, str] = ListingMode.STRICT):
        super().__init__(storage)
        self.listing_mode = ListingMode(listing_mode)

    async def _summarise_document(self, filename: str) -> DocumentMetadata:
        """Read, parse and stat one document."""
        try:
            content = await self.storage.read_text_async(filename)
            document = json.loads(content)
            stat = await self.storage.stat_async(filename)
        except SUMMARY_ERRORS as e:
            raise DocumentSummaryError(filename, str(e)) from e

        return DocumentMetadata(
            filename=filename,
            modified=format_modified(stat.st_mtime),
            cp_count=count_cp_entries(document),
        )

    async def _summarise_or_annotate(self, filename: str) -> DocumentMetadata:
        try:
            return await self._summarise_document(filename)
        except DocumentSummaryError as e:
            self.logger.warning(
                "Skipping unreadable document in listing",
                filename=filename,
                error=e.reason,
            )
            return DocumentMetadata(
                filename=filename, modified=None, cp_count=0, error=e.reason
            )

    async def list_documents(
        self, mode: Optional[Union[ListingMode, str]] = None
    ) -> List[DocumentMetadata]:
        """
        Summarise every document in the documents directory.

        Args:
            mode: Overrides the service's configured listing mode

        Returns:
            One DocumentMetadata per directory entry, in listing order

        Raises:
            StorageError: If the directory cannot be listed, or in strict
                mode if any document cannot be summarised
        """
        mode = ListingMode(mode) if mode else self.listing_mode

        try:
            filenames = await self.storage.list_names_async()
        except StorageClientError as e:
            raise self._storage_failure(LIST_ERROR_MESSAGE, "listing", e)

        if mode is ListingMode.BEST_EFFORT:
            results = await asyncio.gather(
                *(self._summarise_or_annotate(name) for name in filenames)
            )
        else:
            try:
                results = await asyncio.gather(
                    *(self._summarise_document(name) for name in filenames)
                )
            except DocumentSummaryError as e:
                self.logger.error(
                    "Document listing aborted",
                    filename=e.filename,
                    error=e.reason,
                    document_count=len(filenames),
                )
                raise StorageError(
                    METADATA_ERROR_MESSAGE,
                    reason=e.reason,
                    details={"filename": e.filename, "reason": e.reason},
                )

        failed = sum(1 for item in results if item.error)
        self.logger.info(
            "Documents listed",
            mode=mode.value,
            document_count=len(results),
            failed_count=failed,
        )
        return list(results)
