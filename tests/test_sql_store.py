"""
Album Catalog: Relational Store Tests
=======================================

What:  Tests for SqlAlbumStore against a temporary SQLite database, plus
       failure paths with a mock session.

What we test:
    ✅ Inserts get database-assigned IDs (single and batch)
    ✅ Listing is ordered by ID and hides soft-deleted rows
    ✅ Non-integer IDs are rejected, unknown IDs are not found
    ✅ Slow or failing writes/reads become DatabaseError
"""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from album_catalog.exceptions import DatabaseError, NotFoundError, ValidationError
from album_catalog.models.album import Album
from album_catalog.schemas.album import AlbumCreate
from album_catalog.services.sql_store import SqlAlbumStore, parse_row_id


class TestParseRowId:

    def test_plain_integer(self):
        assert parse_row_id("42") == 42

    def test_signed_integer(self):
        assert parse_row_id("-3") == -3

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", " 1", "1_000", "0x10"])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError, match="ID provided is invalid"):
            parse_row_id(raw)

    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            parse_row_id("9" * 30)


class TestSqlStore:

    @pytest.mark.asyncio
    async def test_empty_table_lists_nothing(self, db_session):
        store = SqlAlbumStore(db_session)

        assert await store.list_albums() == []

    @pytest.mark.asyncio
    async def test_single_insert_gets_id(self, db_session):
        store = SqlAlbumStore(db_session)

        stored = await store.add_albums([
            AlbumCreate(title="Blue Train", artist="John Coltrane", price=56.99)
        ])
        await db_session.commit()

        assert stored[0].id == 1
        fetched = await store.get_album("1")
        assert fetched.title == "Blue Train"
        assert fetched.price == 56.99

    @pytest.mark.asyncio
    async def test_batch_insert_consecutive_ids(self, db_session):
        store = SqlAlbumStore(db_session)

        stored = await store.add_albums([
            AlbumCreate(title="A", artist="X", price=1),
            AlbumCreate(title="B", artist="Y", price=2),
            AlbumCreate(title="C", artist="Z", price=3),
        ])
        await db_session.commit()

        assert [a.id for a in stored] == [1, 2, 3]
        listed = await store.list_albums()
        assert [a.title for a in listed] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_response_hides_bookkeeping_columns(self, db_session):
        store = SqlAlbumStore(db_session)

        stored = await store.add_albums([AlbumCreate(title="A", artist="X", price=1)])

        assert set(stored[0].model_dump()) == {"id", "title", "artist", "price"}

    @pytest.mark.asyncio
    async def test_soft_deleted_rows_hidden(self, db_session):
        db_session.add_all([
            Album(title="Live", artist="X", price=1),
            Album(title="Gone", artist="Y", price=2, deleted_at=datetime.now(timezone.utc)),
        ])
        await db_session.commit()
        store = SqlAlbumStore(db_session)

        listed = await store.list_albums()

        assert [a.title for a in listed] == ["Live"]
        with pytest.raises(NotFoundError):
            await store.get_album("2")

    @pytest.mark.asyncio
    async def test_unknown_id_not_found(self, db_session):
        store = SqlAlbumStore(db_session)

        with pytest.raises(NotFoundError):
            await store.get_album("42")

    @pytest.mark.asyncio
    async def test_non_integer_id_rejected(self, db_session):
        store = SqlAlbumStore(db_session)

        with pytest.raises(ValidationError) as exc_info:
            await store.get_album("abc")

        assert exc_info.value.context["id"] == "abc"


class TestSqlStoreFailures:

    @pytest.mark.asyncio
    async def test_slow_insert_times_out(self, mock_db_session):
        async def slow_flush():
            await asyncio.sleep(1)

        mock_db_session.flush = AsyncMock(side_effect=slow_flush)
        store = SqlAlbumStore(mock_db_session, write_timeout=0.01)

        with pytest.raises(DatabaseError) as exc_info:
            await store.add_albums([AlbumCreate(title="A", artist="X", price=1)])

        assert exc_info.value.context["timeout"] == 0.01

    @pytest.mark.asyncio
    async def test_insert_error_wrapped(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))
        )
        store = SqlAlbumStore(mock_db_session)

        with pytest.raises(DatabaseError, match="Could not insert"):
            await store.add_albums([AlbumCreate(title="A", artist="X", price=1)])

    @pytest.mark.asyncio
    async def test_query_error_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("no such table"))
        )
        store = SqlAlbumStore(mock_db_session)

        with pytest.raises(DatabaseError):
            await store.list_albums()
        with pytest.raises(DatabaseError):
            await store.get_album("1")
