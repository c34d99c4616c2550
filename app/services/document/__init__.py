"""
Document services package.

Services:
- document_base_service: Common utilities and shared functionality
- document_crud_service: Save, load, delete and exists
- document_query_service: Listing with derived metadata
- document_service: Orchestration facade (main interface)
"""

from .document_service import DocumentService
from .document_query_service import DocumentSummaryError

__all__ = [
    "DocumentService",
    "DocumentSummaryError",
]
