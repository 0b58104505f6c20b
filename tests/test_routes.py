"""
Album Catalog: HTTP Endpoint Tests
====================================

What:  End-to-end tests for every route through the ASGI app.
How:   HTTPX AsyncClient over ASGITransport; the memory store is reseeded
       and the albums table emptied before each test (see conftest.py).
"""

from typing import List

import pytest
from httpx import ASGITransport, AsyncClient

from album_catalog.exceptions import DatabaseError
from album_catalog.routes.db import get_sql_store
from album_catalog.schemas.album import AlbumCreate, AlbumResponse
from album_catalog.services.album_store import AlbumStore

KIND_OF_BLUE = {"title": "Kind of Blue", "artist": "Miles Davis", "price": 12.5}
BATCH = [
    {"title": "A Love Supreme", "artist": "John Coltrane", "price": 15.0},
    {"title": "Mingus Ah Um", "artist": "Charles Mingus", "price": 11.0},
]
INFINITE_PRICE = b'{"title": "X", "artist": "Y", "price": 1e400}'


class BrokenStore(AlbumStore):
    """Store whose every operation fails like a lost database connection."""

    name = "broken"

    async def list_albums(self) -> List[AlbumResponse]:
        raise DatabaseError(context={"detail": "connection reset by peer"})

    async def get_album(self, album_id: str) -> AlbumResponse:
        raise DatabaseError(context={"detail": "connection reset by peer"})

    async def add_albums(self, albums: List[AlbumCreate]) -> List[AlbumResponse]:
        raise DatabaseError(context={"detail": "connection reset by peer"})


class CrashingStore(BrokenStore):
    """Store that fails with an error the app has no handler for."""

    async def list_albums(self) -> List[AlbumResponse]:
        raise RuntimeError("store exploded")


class TestMemoryRoutes:

    @pytest.mark.asyncio
    async def test_list_seeded_albums(self, test_client):
        response = await test_client.get("/albums")

        assert response.status_code == 200
        albums = response.json()
        assert len(albums) == 4
        assert albums[0] == {
            "id": 1,
            "title": "Blue Train",
            "artist": "John Coltrane",
            "price": 56.99,
        }

    @pytest.mark.asyncio
    async def test_response_is_indented(self, test_client):
        response = await test_client.get("/albums/1")

        assert response.text.startswith('{\n    "id": 1')

    @pytest.mark.asyncio
    async def test_get_one(self, test_client):
        response = await test_client.get("/albums/3")

        assert response.status_code == 200
        assert response.json()["title"] == "Super Hexagon"

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, test_client):
        response = await test_client.get("/albums/99")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["details"]["resource_id"] == "99"
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_upload_single(self, test_client):
        response = await test_client.post("/upload", json={**KIND_OF_BLUE, "id": "1"})

        assert response.status_code == 201
        assert response.json() == {"id": 5, **KIND_OF_BLUE}

        fetched = await test_client.get("/albums/5")
        assert fetched.json()["title"] == "Kind of Blue"

    @pytest.mark.asyncio
    async def test_upload_many(self, test_client):
        response = await test_client.post("/upload", json=BATCH)

        assert response.status_code == 201
        assert [a["id"] for a in response.json()] == [5, 6]

        listed = await test_client.get("/albums")
        assert len(listed.json()) == 6

    @pytest.mark.asyncio
    async def test_upload_invalid_body(self, test_client):
        response = await test_client.post(
            "/upload",
            content=b"this is not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_upload_schema_mismatch(self, test_client):
        response = await test_client.post("/upload", json=[{"title": "Only a title"}])

        assert response.status_code == 400
        locs = [e["loc"] for e in response.json()["details"]["errors"]]
        assert "0.artist" in locs
        assert "0.price" in locs

        listed = await test_client.get("/albums")
        assert len(listed.json()) == 4

    @pytest.mark.asyncio
    async def test_upload_infinite_price(self, test_client):
        response = await test_client.post(
            "/upload",
            content=INFINITE_PRICE,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        listed = await test_client.get("/albums")
        assert listed.status_code == 200
        assert len(listed.json()) == 4

    @pytest.mark.asyncio
    async def test_upload_string_price(self, test_client):
        response = await test_client.post("/upload", json={**KIND_OF_BLUE, "price": "12.5"})

        assert response.status_code == 400


class TestDatabaseRoutes:

    @pytest.mark.asyncio
    async def test_empty_table_no_content(self, test_client):
        response = await test_client.get("/db")

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_upload_single_then_fetch(self, test_client):
        response = await test_client.post("/db/upload", json=KIND_OF_BLUE)

        assert response.status_code == 201
        assert response.json() == {"id": 1, **KIND_OF_BLUE}

        fetched = await test_client.get("/db/1")
        assert fetched.status_code == 200
        assert fetched.json() == {"id": 1, **KIND_OF_BLUE}

    @pytest.mark.asyncio
    async def test_upload_many_then_list(self, test_client):
        response = await test_client.post("/db/upload", json=BATCH)

        assert response.status_code == 201
        assert [a["id"] for a in response.json()] == [1, 2]

        listed = await test_client.get("/db")
        assert listed.status_code == 200
        assert [a["title"] for a in listed.json()] == ["A Love Supreme", "Mingus Ah Um"]

    @pytest.mark.asyncio
    async def test_rejected_upload_inserts_nothing(self, test_client):
        response = await test_client.post("/db/upload", json={"title": "A", "artist": "X"})

        assert response.status_code == 400
        assert (await test_client.get("/db")).status_code == 204

    @pytest.mark.asyncio
    async def test_non_integer_id(self, test_client):
        response = await test_client.get("/db/abc")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "ID provided is invalid"
        assert body["details"]["id"] == "abc"

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_client):
        response = await test_client.get("/db/42")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_backends_are_independent(self, test_client):
        await test_client.post("/db/upload", json=KIND_OF_BLUE)

        memory = await test_client.get("/albums")
        assert len(memory.json()) == 4

    @pytest.mark.asyncio
    async def test_database_failure_is_generic_500(self, test_client):
        from album_catalog.main import app

        app.dependency_overrides[get_sql_store] = lambda: BrokenStore()

        response = await test_client.get("/db")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "connection reset" not in response.text

    @pytest.mark.asyncio
    async def test_upload_infinite_price(self, test_client):
        response = await test_client.post(
            "/db/upload",
            content=INFINITE_PRICE,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert (await test_client.get("/db")).status_code == 204


class TestAmbient:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/albums")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_propagated(self, test_client):
        response = await test_client.get("/albums", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["memory_albums"] == 4

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, test_client):
        from album_catalog.main import app
        from album_catalog.routes.albums import get_memory_store

        app.dependency_overrides[get_memory_store] = lambda: CrashingStore()
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/albums", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert response.json()["request_id"] == "trace-500"
        assert response.headers["X-Request-ID"] == "trace-500"
