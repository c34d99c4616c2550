"""
Document API Router.

Aggregates the document endpoint modules:

- document_upload.py: Map image upload
- document_management.py: Save, load, delete, exists and listing
"""

from fastapi import APIRouter

from app.api.documents_modules.document_upload import router as upload_router
from app.api.documents_modules.document_management import router as management_router

router = APIRouter()

router.include_router(
    upload_router,
    tags=["Map Upload"],
)

router.include_router(
    management_router,
    tags=["Documents"],
)
