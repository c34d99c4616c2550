import logging
import logging.config
import time
from typing import Any, Dict, Optional

import structlog

from app.core.config import Settings, settings as default_settings

HEALTH_ENDPOINTS = ["/health", "/live"]

# Routes that touch the documents directory; everything else is static
DOCUMENT_ROUTE_PREFIXES = (
    "/save-file",
    "/load-file/",
    "/delete-file/",
    "/file-exists/",
    "/get-files",
)


def _renderer(settings: Settings):
    if settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=settings.is_development)


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig for the stdlib side: root, uvicorn and multipart loggers."""
    if settings.LOG_FORMAT == "json":
        formatter = {
            "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        }
    else:
        formatter = {
            "class": "logging.Formatter",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        }

    def logger_entry(level: str, handler: str = "default") -> Dict[str, Any]:
        return {"level": level, "handlers": [handler], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {"()": "app.core.logging.HealthCheckFilter"},
        },
        "formatters": {"default": formatter},
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
            "access": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter"],
            },
        },
        "loggers": {
            "": logger_entry(settings.LOG_LEVEL),
            "uvicorn.error": logger_entry("INFO"),
            "uvicorn.access": logger_entry("INFO", handler="access"),
            # multipart parser is chatty at DEBUG
            "multipart": logger_entry("WARNING"),
        },
    }


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and stdlib logging from settings."""
    settings = settings or default_settings

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(build_logging_config(settings))

    if not settings.DEBUG:
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def classify_request(path: str, maps_prefix: str = "/maps") -> str:
    """Bucket a request path for logging: health, upload, document, map or static."""
    if path in HEALTH_ENDPOINTS:
        return "health"
    if path == "/upload":
        return "upload"
    if path.startswith(DOCUMENT_ROUTE_PREFIXES):
        return "document"
    if path.startswith(maps_prefix.rstrip("/") + "/"):
        return "map"
    return "static"


class RequestLoggingMiddleware:
    """ASGI middleware logging one line per finished HTTP request.

    Health probes are skipped; map and static asset requests log at debug.
    """

    def __init__(self, app, maps_prefix: str = "/maps"):
        self.app = app
        self.maps_prefix = maps_prefix
        self.logger = structlog.get_logger("request")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        kind = classify_request(scope["path"], self.maps_prefix)
        if kind == "health":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        context = {
            "kind": kind,
            "method": scope["method"],
            "path": scope["path"],
        }
        if kind == "upload":
            context["content_length"] = headers.get(b"content-length", b"").decode()

        log = self.logger.info if kind in ("document", "upload") else self.logger.debug
        log("Request started", **context)

        start_time = time.perf_counter()
        status_code = None

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            elif message["type"] == "http.response.body" and not message.get(
                "more_body", False
            ):
                log(
                    "Request completed",
                    status_code=status_code,
                    duration=round(time.perf_counter() - start_time, 4),
                    **context,
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access lines for health probes."""

    def filter(self, record):
        message = record.getMessage()
        return not any(f"{endpoint} " in message for endpoint in HEALTH_ENDPOINTS)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def setup_request_logging(app, settings: Optional[Settings] = None):
    """Add request logging middleware when running in debug mode."""
    settings = settings or default_settings
    if settings.DEBUG:
        app.add_middleware(RequestLoggingMiddleware, maps_prefix=settings.MAPS_URL_PREFIX)


def get_api_logger() -> structlog.BoundLogger:
    return get_logger("api")


def get_service_logger(service_name: str) -> structlog.BoundLogger:
    """Get service-specific logger."""
    return get_logger(f"service.{service_name}")
