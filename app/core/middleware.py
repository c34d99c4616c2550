"""HTTP middleware: CORS for the browser editor and a processing-time header."""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time"


def setup_cors_middleware(app: FastAPI, settings: Settings) -> None:
    """Allow the configured origins to call the document and upload endpoints."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
        expose_headers=[PROCESS_TIME_HEADER],
    )
    logger.info(
        "CORS enabled",
        origins=settings.CORS_ORIGINS,
        credentials=settings.CORS_CREDENTIALS,
        methods=settings.CORS_METHODS,
    )


def setup_timing_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[PROCESS_TIME_HEADER] = f"{time.perf_counter() - started:.4f}"
        return response


def setup_all_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware; the last added runs outermost."""
    setup_cors_middleware(app, settings)
    setup_timing_middleware(app)
