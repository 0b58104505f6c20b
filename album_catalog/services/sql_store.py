"""
Album Catalog: Relational Album Store
=======================================

What:  Reads and writes albums in the `albums` table.
How:   Wraps the request's AsyncSession. Inserts are flushed (not committed)
       so the database assigns IDs; get_db_session commits at the end of
       the request or rolls back on error.
Who:   Backs GET /db, GET /db/{id} and POST /db/upload.

Query plan:
    list:   SELECT ... FROM albums WHERE deleted_at IS NULL ORDER BY id
    get:    SELECT ... FROM albums WHERE id = :id AND deleted_at IS NULL
    insert: one flush for the whole upload, bounded by db_write_timeout
"""

import asyncio
import logging
import re
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from album_catalog.config import settings
from album_catalog.exceptions import DatabaseError, NotFoundError, ValidationError
from album_catalog.models.album import Album
from album_catalog.schemas.album import AlbumCreate, AlbumResponse
from album_catalog.services.album_store import AlbumStore

logger = logging.getLogger(__name__)

_INTEGER_ID = re.compile(r"[+-]?\d+")
_MAX_ROW_ID = 2 ** 63 - 1


def parse_row_id(album_id: str) -> int:
    """
    Convert a path ID into an integer primary key.

    Raises:
        ValidationError: `album_id` is not a base-10 integer that fits
                         the table's 64-bit key.
    """
    if not _INTEGER_ID.fullmatch(album_id):
        raise ValidationError(
            message="ID provided is invalid",
            field="id",
            context={"id": album_id},
        )
    row_id = int(album_id)
    if abs(row_id) > _MAX_ROW_ID:
        raise ValidationError(
            message="ID provided is invalid",
            field="id",
            context={"id": album_id},
        )
    return row_id


class SqlAlbumStore(AlbumStore):
    """SQLAlchemy-backed store bound to one session."""

    name = "sqlite"

    def __init__(self, session: AsyncSession, write_timeout: Optional[float] = None):
        self.session = session
        self.write_timeout = write_timeout or settings.db_write_timeout

    async def list_albums(self) -> List[AlbumResponse]:
        query = (
            select(Album)
            .where(Album.deleted_at.is_(None))
            .order_by(Album.id)
        )
        try:
            result = await self.session.execute(query)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing albums: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve albums. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [AlbumResponse.model_validate(row) for row in rows]

    async def get_album(self, album_id: str) -> AlbumResponse:
        row_id = parse_row_id(album_id)
        try:
            result = await self.session.execute(
                select(Album).where(Album.id == row_id, Album.deleted_at.is_(None))
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching album %s: %s", album_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the album. Please try again.",
                context={"album_id": album_id},
            )

        if row is None:
            raise NotFoundError(resource="album", resource_id=album_id)
        return AlbumResponse.model_validate(row)

    async def add_albums(self, albums: List[AlbumCreate]) -> List[AlbumResponse]:
        rows = [Album(**album.model_dump()) for album in albums]
        self.session.add_all(rows)
        try:
            await asyncio.wait_for(self.session.flush(), timeout=self.write_timeout)
        except asyncio.TimeoutError:
            logger.error(
                "Inserting %d albums exceeded %.1fs", len(rows), self.write_timeout
            )
            raise DatabaseError(
                message="Could not insert data to database",
                context={"rows": len(rows), "timeout": self.write_timeout},
            )
        except SQLAlchemyError as e:
            logger.error("Database error inserting %d albums: %s", len(rows), str(e))
            raise DatabaseError(
                message="Could not insert data to database",
                context={"rows": len(rows), "error_type": type(e).__name__},
            )
        return [AlbumResponse.model_validate(row) for row in rows]
