"""Health check endpoints.

Provides endpoints for:
- Basic health check including storage directory availability
- Liveness probe
"""

import time
from typing import Any, Dict

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> Dict[str, Any]:
    """
    Health check endpoint with storage directory verification.

    Returns 200 if both storage directories exist, 503 otherwise.
    """
    settings = request.app.state.settings
    storage = {
        "documents": request.app.state.document_service.storage.is_available,
        "maps": request.app.state.upload_service.storage.is_available,
    }

    if not all(storage.values()):
        logger.warning("Health check failed: storage unavailable", storage=storage)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "timestamp": time.time(),
                "version": settings.VERSION,
                "storage": storage,
            },
        )

    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "storage": storage,
    }


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness probe endpoint."""
    return {"alive": True, "timestamp": time.time()}
