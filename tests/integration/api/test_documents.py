"""
Integration tests for document endpoints.

Tests /save-file, /load-file, /delete-file, /file-exists and /get-files.
"""

import json
import os

import pytest


class TestSaveAndLoad:
    """Tests for POST /save-file and GET /load-file/{filename}."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_save_then_load(self, async_client, map_document, document_filename):
        response = await async_client.post(
            "/save-file", json={"filename": document_filename, "data": map_document}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "File saved successfully!"}

        response = await async_client.get(f"/load-file/{document_filename}")

        assert response.status_code == 200
        assert response.json() == map_document

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_save_overwrites(self, async_client):
        await async_client.post("/save-file", json={"filename": "a.json", "data": [1]})
        await async_client.post("/save-file", json={"filename": "a.json", "data": [2]})

        response = await async_client.get("/load-file/a.json")

        assert response.json() == [2]

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_save_null_document(self, async_client):
        await async_client.post("/save-file", json={"filename": "a.json", "data": None})

        response = await async_client.get("/load-file/a.json")

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_save_missing_fields(self, async_client):
        response = await async_client.post("/save-file", json={"filename": "a.json"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.api
    @pytest.mark.asyncio
    @pytest.mark.parametrize("filename", ["../escape.json", "sub/dir.json", "..", ""])
    async def test_save_rejects_unsafe_filename(self, async_client, tmp_path, filename):
        response = await async_client.post(
            "/save-file", json={"filename": filename, "data": {"x": 1}}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert not (tmp_path / "escape.json").exists()

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_load_missing_is_server_error(self, async_client):
        response = await async_client.get("/load-file/missing.json")

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "Error loading file"
        assert data["error"]["code"] == "STORAGE_ERROR"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_load_corrupt_is_server_error(self, async_client, write_document):
        write_document("broken.json", "{oops")

        response = await async_client.get("/load-file/broken.json")

        assert response.status_code == 500
        assert response.json()["message"] == "Error loading file"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_load_invalid_utf8_is_server_error(self, async_client, documents_dir):
        (documents_dir / "bad.json").write_bytes(b'{"cP": ["\xff\xfe"]}')

        response = await async_client.get("/load-file/bad.json")

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "Error loading file"
        assert data["error"]["code"] == "STORAGE_ERROR"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_save_lone_surrogate_replaces_document(
        self, async_client, documents_dir
    ):
        await async_client.post(
            "/save-file", json={"filename": "k.json", "data": {"cP": [1, 2, 3]}}
        )

        response = await async_client.post(
            "/save-file",
            content=b'{"filename": "k.json", "data": "\\ud800"}',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "File saved successfully!"}
        assert json.loads((documents_dir / "k.json").read_text()) == "\ud800"

        response = await async_client.get("/load-file/k.json")

        assert response.status_code == 200
        assert response.json() == "\ud800"

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_load_traversal_rejected(self, async_client):
        response = await async_client.get("/load-file/..%5Csecret.json")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestExistsAndDelete:
    """Tests for GET /file-exists and DELETE /delete-file."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_exists_lifecycle(self, async_client):
        response = await async_client.get("/file-exists/route.json")
        assert response.status_code == 200
        assert response.json() == {"exists": False}

        await async_client.post(
            "/save-file", json={"filename": "route.json", "data": {"cP": []}}
        )
        response = await async_client.get("/file-exists/route.json")
        assert response.json() == {"exists": True}

        response = await async_client.delete("/delete-file/route.json")
        assert response.status_code == 200
        assert response.json() == {"message": "File deleted successfully!"}

        response = await async_client.get("/file-exists/route.json")
        assert response.json() == {"exists": False}

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_delete_missing_fails(self, async_client):
        response = await async_client.delete("/delete-file/missing.json")

        assert response.status_code == 500
        assert response.json()["message"] == "Error deleting the file"


class TestListDocuments:
    """Tests for GET /get-files."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_empty(self, async_client):
        response = await async_client.get("/get-files")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_cp_counts(self, async_client, write_document):
        write_document("a.json", {"cP": [1, 2, 3, 4, 5]})
        write_document("b.json", {"title": "no cP"})
        path = write_document("c.json", {"cP": {"not": "array"}})
        os.utime(path, (1_700_000_000, 1_700_000_000))

        response = await async_client.get("/get-files")

        assert response.status_code == 200
        data = response.json()
        assert [(d["filename"], d["cPCount"]) for d in data] == [
            ("a.json", 5),
            ("b.json", 0),
            ("c.json", 0),
        ]
        assert data[2]["modified"] == "2023-11-14T22:13:20.000Z"
        assert all(set(d) == {"filename", "modified", "cPCount"} for d in data)

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_strict_listing_fails_entirely(self, async_client, write_document):
        write_document("a.json", {"cP": [1]})
        write_document("b.json", "not json at all")
        write_document("c.json", {"cP": [1, 2]})

        response = await async_client.get("/get-files")

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "Error getting file metadata"
        assert data["error"]["details"]["filename"] == "b.json"
        assert "a.json" not in response.text
        assert "c.json" not in response.text

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_best_effort_listing_query_override(self, async_client, write_document):
        write_document("a.json", {"cP": [1]})
        write_document("b.json", "not json at all")
        write_document("c.json", {"cP": [1, 2]})

        response = await async_client.get("/get-files", params={"mode": "best_effort"})

        assert response.status_code == 200
        data = response.json()
        assert [d["filename"] for d in data] == ["a.json", "b.json", "c.json"]
        assert data[0]["cPCount"] == 1 and "error" not in data[0]
        assert data[2]["cPCount"] == 2 and "error" not in data[2]
        assert data[1]["modified"] is None
        assert data[1]["cPCount"] == 0
        assert data[1]["error"]

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_unknown_mode_rejected(self, async_client):
        response = await async_client.get("/get-files", params={"mode": "lenient"})

        assert response.status_code == 422


class TestConfiguredListingMode:
    """Tests for LISTING_MODE=best_effort at the application level."""

    @pytest.mark.api
    @pytest.mark.asyncio
    async def test_best_effort_default(self, test_settings, write_document):
        from httpx import AsyncClient, ASGITransport
        from app.main import create_app

        app = create_app(test_settings.model_copy(update={"LISTING_MODE": "best_effort"}))
        write_document("bad.json", "{")

        async with app.router.lifespan_context(app):
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                response = await client.get("/get-files")

        assert response.status_code == 200
        assert response.json()[0]["error"]
