"""
Album Catalog: In-Memory Album Store
======================================

What:  Keeps albums in a process-local list.
How:   IDs are sequential: each new album gets len(storage) + 1. Nothing is
       ever removed, so IDs stay unique for the life of the process.
Who:   Backs GET /albums, GET /albums/{id} and POST /upload.

Contents are lost on restart. At startup the lifespan handler calls
reset(), which re-seeds the four sample albums when SEED_MEMORY_STORE is on.
"""

import logging
from typing import List

from album_catalog.exceptions import NotFoundError
from album_catalog.schemas.album import AlbumCreate, AlbumResponse
from album_catalog.services.album_store import AlbumStore

logger = logging.getLogger(__name__)

SEED_ALBUMS = (
    AlbumCreate(title="Blue Train", artist="John Coltrane", price=56.99),
    AlbumCreate(title="Bleed the Future", artist="AUM", price=19.99),
    AlbumCreate(title="Super Hexagon", artist="Chipzel", price=8.0),
    AlbumCreate(title="Hirschbrunnen", artist="delving", price=14.99),
)


class MemoryAlbumStore(AlbumStore):
    """
    List-backed store.

    All operations run without awaiting anything, so on a single event loop
    each call completes without interleaving with another request.
    """

    name = "memory"

    def __init__(self, seed: bool = True):
        self._albums: List[AlbumResponse] = []
        if seed:
            self._append_all(list(SEED_ALBUMS))

    def __len__(self) -> int:
        return len(self._albums)

    def reset(self, seed: bool = True) -> None:
        """Drop every album, then optionally load the sample albums."""
        self._albums = []
        if seed:
            self._append_all(list(SEED_ALBUMS))
        logger.debug("Memory store reset (seeded=%s, albums=%d)", seed, len(self._albums))

    async def list_albums(self) -> List[AlbumResponse]:
        return list(self._albums)

    async def get_album(self, album_id: str) -> AlbumResponse:
        for album in self._albums:
            if str(album.id) == album_id:
                return album
        raise NotFoundError(resource="album", resource_id=album_id)

    async def add_albums(self, albums: List[AlbumCreate]) -> List[AlbumResponse]:
        return self._append_all(albums)

    def _append_all(self, albums: List[AlbumCreate]) -> List[AlbumResponse]:
        stored = []
        for album in albums:
            record = AlbumResponse(id=len(self._albums) + 1, **album.model_dump())
            self._albums.append(record)
            stored.append(record)
        return stored


# ── Singleton Instance ────────────────────────────────────────────────────
memory_store = MemoryAlbumStore()
