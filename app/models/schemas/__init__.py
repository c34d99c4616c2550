"""Pydantic schemas for API requests and responses.

- document.py: Document save/load/list schemas
- upload.py: Map image upload schemas
- errors.py: Error response schemas
- validators.py: Shared validator functions

Import from this module: `from app.models.schemas import DocumentMetadata`
"""

from app.models.schemas.document import (
    DocumentSaveRequest,
    DocumentMessageResponse,
    DocumentExistsResponse,
    DocumentMetadata,
)
from app.models.schemas.upload import MapUploadResponse
from app.models.schemas.errors import ErrorResponse, APIErrorResponse
from app.models.schemas.validators import validate_storage_filename

__all__ = [
    "DocumentSaveRequest",
    "DocumentMessageResponse",
    "DocumentExistsResponse",
    "DocumentMetadata",
    "MapUploadResponse",
    "ErrorResponse",
    "APIErrorResponse",
    "validate_storage_filename",
]
