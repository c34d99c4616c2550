"""
Shared utilities and dependencies for document API endpoints.

Services live on ``app.state`` so every application instance works on its
own directories.
"""

import json
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.logging import get_api_logger
from app.services.document import DocumentService
from app.services.upload_service import MapUploadService

# Shared logger instance
logger = get_api_logger()


class DocumentJSONResponse(JSONResponse):
    """JSON response that can render any stored document.

    Strings holding lone surrogates are not UTF-8 encodable; such documents
    are rendered with non-ASCII characters escaped.
    """

    def render(self, content: Any) -> bytes:
        try:
            return super().render(content)
        except UnicodeEncodeError:
            return json.dumps(
                content, allow_nan=False, separators=(",", ":")
            ).encode("utf-8")


def get_document_service(request: Request) -> DocumentService:
    """Document service bound to the running application."""
    return request.app.state.document_service


def get_upload_service(request: Request) -> MapUploadService:
    """Upload service bound to the running application."""
    return request.app.state.upload_service


def log_operation_start(operation: str, **context) -> None:
    """Log the start of an operation consistently."""
    logger.info(f"{operation} started", **context)


def log_operation_success(operation: str, **context) -> None:
    """Log successful operation completion consistently."""
    logger.info(f"{operation} completed successfully", **context)
