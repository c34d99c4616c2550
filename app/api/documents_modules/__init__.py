"""
Document API modules.

- common.py: Shared dependencies and logging helpers
- document_upload.py: Map image upload
- document_management.py: Document save, load, delete, exists and listing
"""
