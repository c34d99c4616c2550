"""
Pytest configuration and fixtures for the test suite.

This module provides shared fixtures for unit and integration tests. Every
test gets its own documents/maps directories under ``tmp_path``.
"""

import os
import json
from datetime import datetime
from pathlib import Path
from typing import Any, AsyncGenerator, Dict

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport

# Set test environment before importing app modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

fake = Faker()

# Smallest valid PNG: signature, IHDR, IDAT, IEND for a 1x1 pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (API)")
    config.addinivalue_line("markers", "api: API endpoint tests")


# =============================================================================
# Settings and Storage Fixtures
# =============================================================================

@pytest.fixture
def documents_dir(tmp_path: Path) -> Path:
    return tmp_path / "files"


@pytest.fixture
def maps_dir(tmp_path: Path) -> Path:
    return tmp_path / "maps"


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    path = tmp_path / "public"
    path.mkdir()
    (path / "index.html").write_text("<html><body>map editor</body></html>")
    return path


@pytest.fixture
def test_settings(documents_dir: Path, maps_dir: Path, static_dir: Path):
    """Settings pointing every directory at tmp_path."""
    from app.core.config import Settings

    return Settings(
        ENVIRONMENT="test",
        DEBUG=False,
        DOCUMENTS_DIR=documents_dir,
        MAPS_DIR=maps_dir,
        STATIC_DIR=static_dir,
        LISTING_MODE="strict",
    )


@pytest.fixture
def documents_storage(documents_dir: Path):
    """Storage client on an existing, empty documents directory."""
    from app.core.storage_client import LocalStorageClient

    storage = LocalStorageClient(documents_dir, name="documents")
    storage.ensure_directory()
    return storage


@pytest.fixture
def maps_storage(maps_dir: Path):
    from app.core.storage_client import LocalStorageClient

    storage = LocalStorageClient(maps_dir, name="maps")
    storage.ensure_directory()
    return storage


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2025-03-14 09:26:53 local time."""
    return lambda: datetime(2025, 3, 14, 9, 26, 53)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def app(test_settings):
    """Create an isolated FastAPI application instance."""
    from app.main import create_app

    return create_app(test_settings)


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for API testing, with lifespan run."""
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test"
        ) as client:
            yield client


# =============================================================================
# Test Data Generators
# =============================================================================

@pytest.fixture
def map_document() -> Dict[str, Any]:
    """Generate a random map document with a cP array."""
    return {
        "name": fake.city(),
        "author": fake.name(),
        "cP": [
            [float(fake.latitude()), float(fake.longitude())]
            for _ in range(fake.random_int(min=1, max=8))
        ],
        "settings": {"zoom": fake.random_int(min=1, max=18), "grid": True},
    }


@pytest.fixture
def document_filename() -> str:
    return fake.file_name(extension="json")


@pytest.fixture
def write_document(documents_dir: Path):
    """Place a document on disk directly; strings are written verbatim."""

    def _write(filename: str, content: Any) -> Path:
        documents_dir.mkdir(parents=True, exist_ok=True)
        path = documents_dir / filename
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content, indent=2))
        return path

    return _write


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES
