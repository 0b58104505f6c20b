"""
Album Catalog: Album Service (Upload Binding & Orchestration)
===============================================================

What:  Turns request bodies into validated albums and hands them to a store.
How:   The upload body may be one album or a list of albums. The service
       tries the single-record shape first, then the list shape, and
       rejects the body if neither fits. The chosen store assigns IDs.
Who:   Called by the memory routes and the relational routes alike.

Upload Flow:
    ┌──────────┐    ┌──────────────┐    ┌───────────────┐    ┌──────────┐
    │  Body    │───▶│  JSON decode │───▶│ one │ many    │───▶│  Store   │
    │  (Route) │    │              │    │ (AlbumCreate) │    │ (IDs)    │
    └──────────┘    └──────────────┘    └───────────────┘    └──────────┘

    Response shape follows request shape: a single object in, a single
    album out; an array in, an array out.
"""

import json
import logging
from typing import Any, Dict, List, Tuple, Union

from pydantic import ValidationError as SchemaValidationError

from album_catalog.exceptions import ValidationError
from album_catalog.schemas.album import AlbumCreate, AlbumResponse, album_list_adapter
from album_catalog.services.album_store import AlbumStore

logger = logging.getLogger(__name__)


def _describe_errors(exc: SchemaValidationError) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into JSON-safe {loc, msg} pairs."""
    return [
        {
            "loc": ".".join(str(part) for part in error["loc"]),
            "msg": error["msg"],
        }
        for error in exc.errors()
    ]


class AlbumService:
    """
    Stateless orchestration over an AlbumStore.

    Responsibilities:
        - parse_upload(): dual-shape binding of the request body
        - upload(): parse, then persist through the store
        - list_albums() / get_album(): pass-through with logging
    """

    def parse_upload(self, body: bytes) -> Tuple[List[AlbumCreate], bool]:
        """
        Bind an upload body to one or many albums.

        Args:
            body: Raw request body.

        Returns:
            (albums, is_batch). `is_batch` is False when the body was a
            single album object.

        Raises:
            ValidationError: Body is not JSON, matches neither shape,
                             or is an empty list.
        """
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValidationError(
                message="Request body is not valid JSON",
                context={"reason": str(e)},
            )

        # First attempt: a single record
        try:
            return [AlbumCreate.model_validate(payload)], False
        except SchemaValidationError as e:
            single_error = e

        # Second attempt: a list of records
        try:
            albums = album_list_adapter.validate_python(payload)
        except SchemaValidationError as e:
            # Report the attempt whose shape the client actually sent
            reported = e if isinstance(payload, list) else single_error
            raise ValidationError(
                message="Data provided did not match the album schema",
                context={"errors": _describe_errors(reported)},
            )

        if not albums:
            raise ValidationError(message="Upload contained no albums")
        return albums, True

    async def upload(
        self, store: AlbumStore, body: bytes
    ) -> Union[AlbumResponse, List[AlbumResponse]]:
        """
        Validate `body` and persist the albums it describes.

        Returns:
            The stored album for a single-record body, or the list of stored
            albums for a batch body. Every album carries its new ID.
        """
        albums, is_batch = self.parse_upload(body)
        stored = await store.add_albums(albums)
        logger.info(
            "Stored %d album(s) in %s store (ids=%s)",
            len(stored),
            store.name,
            ",".join(str(album.id) for album in stored),
        )
        return stored if is_batch else stored[0]

    async def list_albums(self, store: AlbumStore) -> List[AlbumResponse]:
        albums = await store.list_albums()
        logger.debug("Listed %d album(s) from %s store", len(albums), store.name)
        return albums

    async def get_album(self, store: AlbumStore, album_id: str) -> AlbumResponse:
        return await store.get_album(album_id)


# ── Singleton Instance ────────────────────────────────────────────────────
album_service = AlbumService()
