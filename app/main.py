"""FastAPI Application Entry Point.

Map document service built with FastAPI, featuring:
- Map image upload, served back under /maps
- JSON map document save/load/delete/exists
- Document listing with modification time and cP entry counts
- Static asset serving at the site root
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings as default_settings
from app.core.logging import configure_logging, setup_request_logging, get_logger
from app.core.exceptions import setup_exception_handlers
from app.core.middleware import setup_all_middleware
from app.api.health import router as health_router
from app.api.documents_main import router as documents_router
from app.services.document import DocumentService
from app.services.upload_service import MapUploadService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    settings: Settings = app.state.settings

    logger.info(
        "Starting application",
        project_name=settings.PROJECT_NAME,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
    )

    # Mounted directories must exist before the first request
    app.state.document_service.initialize()
    app.state.upload_service.initialize()
    if not settings.STATIC_DIR.is_dir():
        settings.STATIC_DIR.mkdir(parents=True, exist_ok=True)
        logger.info("Created static directory", static_dir=str(settings.STATIC_DIR))

    logger.info(
        "Application startup completed",
        documents_dir=str(settings.DOCUMENTS_DIR),
        maps_dir=str(settings.MAPS_DIR),
        listing_mode=settings.LISTING_MODE,
        url=f"http://localhost:{settings.PORT}",
    )

    yield

    logger.info("Application shutdown completed")


API_DESCRIPTION = """# Map Document Service

Stores JSON map documents and uploaded map images on the local filesystem.

## Documents
- `POST /save-file` - create or overwrite a document
- `GET /load-file/{filename}` - read a document back
- `DELETE /delete-file/{filename}` - remove a document
- `GET /file-exists/{filename}` - presence check
- `GET /get-files` - list documents with modification time and `cP` count

## Maps
- `POST /upload` - upload a PNG/JPEG image (multipart field `file`)
- `GET /maps/{name}` - stored images
"""


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application instance bound to the given settings.

    Each instance gets its own document and upload services, so several
    apps with different directories can coexist in one process.
    """
    settings = settings or default_settings

    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=API_DESCRIPTION,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.document_service = DocumentService.from_settings(settings)
    app.state.upload_service = MapUploadService.from_settings(settings)

    setup_all_middleware(app, settings)
    setup_exception_handlers(app)
    setup_request_logging(app, settings)

    app.include_router(health_router)
    app.include_router(documents_router)

    # Both directories are created in lifespan, so defer the existence checks
    app.mount(
        settings.MAPS_URL_PREFIX,
        StaticFiles(directory=settings.MAPS_DIR, check_dir=False),
        name="maps",
    )

    # Mounted last: "/" would otherwise shadow the API routes
    app.mount(
        "/",
        StaticFiles(directory=settings.STATIC_DIR, html=True, check_dir=False),
        name="static",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level=default_settings.LOG_LEVEL.lower(),
        access_log=True,
    )
