"""
Document management endpoints.

- Existence check, listing with metadata
- Save (create or overwrite), load, delete
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.models.document import ListingMode
from app.models.schemas import (
    APIErrorResponse,
    DocumentExistsResponse,
    DocumentMessageResponse,
    DocumentMetadata,
    DocumentSaveRequest,
)
from app.services.document import DocumentService
from .common import (
    DocumentJSONResponse,
    get_document_service,
    log_operation_start,
    log_operation_success,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": APIErrorResponse, "description": "Invalid filename"},
    500: {"model": APIErrorResponse, "description": "Storage error"},
}


@router.get(
    "/file-exists/{filename}",
    response_model=DocumentExistsResponse,
    summary="Check Document Exists",
    operation_id="documentExists",
    responses={400: ERROR_RESPONSES[400]},
)
async def document_exists(
    filename: str,
    document_service: DocumentService = Depends(get_document_service),
):
    """A missing document is reported as `exists: false`, never as an error."""
    exists = await document_service.document_exists(filename)
    return DocumentExistsResponse(exists=exists)


@router.get(
    "/get-files",
    response_model=List[DocumentMetadata],
    response_model_exclude_unset=True,
    summary="List Documents",
    operation_id="listDocuments",
    description="""List every stored document with its modification time and `cP` entry count.

**Modes:**
- `strict`: one unreadable or corrupt document fails the whole listing with 500
- `best_effort`: such documents are returned with `modified: null` and an `error`

Without `mode`, the server's configured listing mode applies.""",
    responses={500: ERROR_RESPONSES[500]},
)
async def list_documents(
    mode: Optional[ListingMode] = Query(
        None, description="Override the configured listing mode"
    ),
    document_service: DocumentService = Depends(get_document_service),
):
    return await document_service.list_documents(mode)


@router.post(
    "/save-file",
    response_model=DocumentMessageResponse,
    summary="Save Document",
    operation_id="saveDocument",
    description="""Create or overwrite a JSON document.

**Example Request:**
```bash
curl -X POST "http://localhost:3000/save-file" \\
  -H "Content-Type: application/json" \\
  -d '{"filename": "harbour-route.json", "data": {"cP": [[1, 2], [3, 4]]}}'
```""",
    responses=ERROR_RESPONSES,
)
async def save_document(
    request: DocumentSaveRequest,
    document_service: DocumentService = Depends(get_document_service),
):
    log_operation_start("Document save", filename=request.filename)

    await document_service.save_document(request.filename, request.data)

    log_operation_success("Document save", filename=request.filename)
    return DocumentMessageResponse(message="File saved successfully!")


@router.get(
    "/load-file/{filename}",
    response_model=None,
    response_class=DocumentJSONResponse,
    summary="Load Document",
    operation_id="loadDocument",
    description="Return the stored JSON document exactly as saved.",
    responses=ERROR_RESPONSES,
)
async def load_document(
    filename: str,
    document_service: DocumentService = Depends(get_document_service),
):
    return await document_service.load_document(filename)


@router.delete(
    "/delete-file/{filename}",
    response_model=DocumentMessageResponse,
    summary="Delete Document",
    operation_id="deleteDocument",
    description="Delete a stored document. Deleting a missing document is an error.",
    responses=ERROR_RESPONSES,
)
async def delete_document(
    filename: str,
    document_service: DocumentService = Depends(get_document_service),
):
    log_operation_start("Document delete", filename=filename)

    await document_service.delete_document(filename)

    log_operation_success("Document delete", filename=filename)
    return DocumentMessageResponse(message="File deleted successfully!")
