"""
Album Catalog: Relational Album Routes
========================================

What:  GET /db, GET /db/{id} and POST /db/upload against the `albums` table.
How:   Each request gets an AsyncSession (committed after the handler
       returns) wrapped in a SqlAlbumStore; AlbumService does the rest.

Status codes:
    GET /db          200 with albums, 204 when the table has no rows
    GET /db/{id}     200, 400 for a non-integer ID, 404 for an unknown ID
    POST /db/upload  201, 400 for a body matching neither shape
    any              500 when the database fails
"""

from typing import List, Union

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from album_catalog.database import get_db_session
from album_catalog.schemas.album import AlbumResponse, ErrorResponse, upload_request_body
from album_catalog.services.album_service import album_service
from album_catalog.services.sql_store import SqlAlbumStore


router = APIRouter(prefix="/db", tags=["Albums (database)"])


def get_sql_store(db: AsyncSession = Depends(get_db_session)) -> SqlAlbumStore:
    """Dependency wrapping the request's session in a store."""
    return SqlAlbumStore(db)


@router.get(
    "",
    response_model=List[AlbumResponse],
    responses={
        204: {"description": "No albums stored"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List every album in the database",
)
async def list_albums(store: SqlAlbumStore = Depends(get_sql_store)):
    albums = await album_service.list_albums(store)
    if not albums:
        return Response(status_code=204)
    return albums


@router.get(
    "/{album_id}",
    response_model=AlbumResponse,
    responses={
        400: {"description": "ID is not an integer", "model": ErrorResponse},
        404: {"description": "No album with this ID", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get one album from the database by ID",
)
async def get_album(
    album_id: str,
    store: SqlAlbumStore = Depends(get_sql_store),
) -> AlbumResponse:
    return await album_service.get_album(store, album_id)


@router.post(
    "/upload",
    status_code=201,
    response_model=Union[AlbumResponse, List[AlbumResponse]],
    responses={
        201: {"description": "Album(s) inserted with generated IDs"},
        400: {"description": "Body is neither an album nor a list of albums", "model": ErrorResponse},
        500: {"description": "Insert failed", "model": ErrorResponse},
    },
    summary="Upload one album or a list of albums to the database",
    openapi_extra={"requestBody": upload_request_body()},
)
async def upload_albums(
    request: Request,
    store: SqlAlbumStore = Depends(get_sql_store),
) -> Union[AlbumResponse, List[AlbumResponse]]:
    """
    Insert one album or many.

    A list is inserted in a single flush; if any row fails, none are kept.
    """
    body = await request.body()
    return await album_service.upload(store, body)
