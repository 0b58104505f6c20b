"""
Album Catalog: In-Memory Album Routes
=======================================

What:  GET /albums, GET /albums/{id} and POST /upload against the memory store.
How:   Extracts path parameters or the raw body, delegates to AlbumService
       with the memory store, returns JSON.

Lookups compare the path ID as text with the stored ID, so `/albums/01`
does not match album 1.
"""

from typing import List, Union

from fastapi import APIRouter, Depends, Request

from album_catalog.schemas.album import AlbumResponse, ErrorResponse, upload_request_body
from album_catalog.services.album_service import album_service
from album_catalog.services.memory_store import MemoryAlbumStore, memory_store


router = APIRouter(tags=["Albums (memory)"])


def get_memory_store() -> MemoryAlbumStore:
    """Dependency returning the process-wide memory store."""
    return memory_store


@router.get(
    "/albums",
    response_model=List[AlbumResponse],
    summary="List every album in memory",
)
async def list_albums(
    store: MemoryAlbumStore = Depends(get_memory_store),
) -> List[AlbumResponse]:
    return await album_service.list_albums(store)


@router.get(
    "/albums/{album_id}",
    response_model=AlbumResponse,
    responses={
        404: {"description": "No album with this ID", "model": ErrorResponse},
    },
    summary="Get one album from memory by ID",
)
async def get_album(
    album_id: str,
    store: MemoryAlbumStore = Depends(get_memory_store),
) -> AlbumResponse:
    return await album_service.get_album(store, album_id)


@router.post(
    "/upload",
    status_code=201,
    response_model=Union[AlbumResponse, List[AlbumResponse]],
    responses={
        201: {"description": "Album(s) stored with generated IDs"},
        400: {"description": "Body is neither an album nor a list of albums", "model": ErrorResponse},
    },
    summary="Upload one album or a list of albums to memory",
    openapi_extra={"requestBody": upload_request_body()},
)
async def upload_albums(
    request: Request,
    store: MemoryAlbumStore = Depends(get_memory_store),
) -> Union[AlbumResponse, List[AlbumResponse]]:
    """
    Store one album or many.

    The body is either a single album object or a JSON array of them. IDs
    in the body are ignored; each stored album gets the next sequential ID.
    The response mirrors the request shape.
    """
    body = await request.body()
    return await album_service.upload(store, body)
