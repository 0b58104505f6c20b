"""
Album Catalog: Abstract Album Store Interface
===============================================

What:  Abstract base class defining the contract for album storage backends.
How:   Concrete stores inherit from AlbumStore and implement the three
       operations the API needs.
Who:   Called by AlbumService; implemented by MemoryAlbumStore and
       SqlAlbumStore.

Implementations:
    - MemoryAlbumStore: process-local list, sequential IDs (len + 1)
    - SqlAlbumStore:    `albums` table through an async SQLAlchemy session
"""

from abc import ABC, abstractmethod
from typing import List

from album_catalog.schemas.album import AlbumCreate, AlbumResponse


class AlbumStore(ABC):
    """
    Abstract interface for album persistence.

    Contract:
        - IDs are always assigned by the store, never by the caller
        - add_albums() returns the stored albums in the order given
        - get_album() raises NotFoundError for unknown IDs
        - Backend-specific failures are wrapped in DatabaseError
    """

    #: Short name used in log lines ("memory", "sqlite", ...)
    name: str = "store"

    @abstractmethod
    async def list_albums(self) -> List[AlbumResponse]:
        """Return every stored album in insertion (ID) order."""

    @abstractmethod
    async def get_album(self, album_id: str) -> AlbumResponse:
        """
        Return the album whose ID matches `album_id`.

        Args:
            album_id: The ID exactly as it appeared in the request path.

        Raises:
            NotFoundError: No album has this ID.
            ValidationError: The backend cannot interpret this ID at all.
        """

    @abstractmethod
    async def add_albums(self, albums: List[AlbumCreate]) -> List[AlbumResponse]:
        """Assign IDs to `albums`, persist them, and return the stored records."""
