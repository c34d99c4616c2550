import uuid
import traceback
from typing import Any, Dict, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger

logger = get_logger(__name__)


class MapServiceError(Exception):
    """Base exception for the map document service."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)


class InvalidFilenameError(MapServiceError):
    """Client supplied a document filename that cannot be used as a path."""

    def __init__(self, message: str, filename: Optional[str] = None):
        details = {"filename": filename} if filename is not None else None
        super().__init__(message, "VALIDATION_ERROR", details)


class UploadValidationError(MapServiceError):
    """Upload rejected before anything was written (missing file, bad MIME type)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UPLOAD_VALIDATION_ERROR", details)


class StorageError(MapServiceError):
    """Filesystem read/write/delete/stat or document parse failure.

    ``message`` is the generic text shown to clients; the underlying cause is
    kept in ``reason`` for logs and, where the endpoint exposes it, the body.
    """

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.reason = reason
        super().__init__(message, "STORAGE_ERROR", details)


STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UPLOAD_VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "STORAGE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _new_error_id() -> str:
    return uuid.uuid4().hex[:8]


def create_error_response(
    status_code: int,
    message: str,
    error_code: str = "INTERNAL_ERROR",
    details: Optional[Dict[str, Any]] = None,
    error_id: Optional[str] = None,
    request_path: Optional[str] = None,
) -> JSONResponse:
    """Create standardized error response.

    The top-level ``message`` keeps the body shape existing clients read;
    ``error`` carries the structured envelope.
    """

    error_id = error_id or _new_error_id()

    error_response = {
        "message": message,
        "error": {
            "code": error_code,
            "message": message,
            "error_id": error_id,
        },
    }

    if details:
        error_response["error"]["details"] = details

    if request_path:
        error_response["error"]["path"] = request_path

    return JSONResponse(status_code=status_code, content=error_response)


def _request_context(request: Request, error_id: str) -> Dict[str, Any]:
    return {
        "path": request.url.path,
        "method": request.method,
        "error_id": error_id,
    }


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors, including 404s from the static mounts."""
    error_id = _new_error_id()

    # Missing static assets and maps are routine; keep them out of warnings
    log = logger.debug if exc.status_code == status.HTTP_404_NOT_FOUND else logger.warning
    log(
        "HTTP exception occurred",
        status_code=exc.status_code,
        detail=exc.detail,
        **_request_context(request, error_id),
    )

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code="HTTP_ERROR",
        error_id=error_id,
        request_path=request.url.path,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies and parameters as 422."""
    error_id = _new_error_id()
    validation_errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        errors=validation_errors,
        **_request_context(request, error_id),
    )

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Request validation failed",
        error_code="VALIDATION_ERROR",
        details={"validation_errors": validation_errors},
        error_id=error_id,
        request_path=request.url.path,
    )


async def map_service_exception_handler(
    request: Request, exc: MapServiceError
) -> JSONResponse:
    """Render application errors with the status their code maps to."""
    error_id = _new_error_id()
    status_code = STATUS_CODE_MAP.get(
        exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        error_code=exc.error_code,
        message=exc.message,
        reason=getattr(exc, "reason", None),
        details=exc.details,
        **_request_context(request, error_id),
    )

    return create_error_response(
        status_code=status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        error_id=error_id,
        request_path=request.url.path,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort; tracebacks are only exposed in development."""
    error_id = _new_error_id()

    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
        **_request_context(request, error_id),
    )

    details = None
    message = "An unexpected error occurred"
    if request.app.state.settings.is_development:
        message = str(exc)
        details = {
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc().splitlines(),
        }

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=message,
        error_code="INTERNAL_ERROR",
        details=details,
        error_id=error_id,
        request_path=request.url.path,
    )


def setup_exception_handlers(app) -> None:
    """Register handlers; the most specific exception type wins."""
    app.add_exception_handler(MapServiceError, map_service_exception_handler)
    # FastAPI's HTTPException subclasses Starlette's, so this covers both
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
