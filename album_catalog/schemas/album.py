"""
Album Catalog: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract.
How:   AlbumCreate validates upload payloads (one record or a list of
       records); AlbumResponse shapes stored albums for output.
Who:   Used by the album service, both stores and the route handlers.

Schemas are separate from the SQLAlchemy model so that bookkeeping columns
(created_at, updated_at, deleted_at) never leave the service.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AlbumCreate(BaseModel):
    """
    What:  One album as submitted by a client.

    Clients do not know which IDs are taken, so any `id` in the payload is
    ignored along with other unknown fields; the store assigns the ID.
    """
    title: str = Field(min_length=1, max_length=255, description="Album title")
    artist: str = Field(min_length=1, max_length=255, description="Recording artist")
    price: float = Field(
        ge=0,
        strict=True,
        allow_inf_nan=False,
        description="Price in the catalog currency",
    )

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


# Validator for the batch form of an upload
album_list_adapter = TypeAdapter(List[AlbumCreate])


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AlbumResponse(BaseModel):
    """
    What:  Public representation of a stored album.
    Who:   Returned by every album endpoint, for both backends.
    """
    id: int = Field(description="Server-assigned album identifier")
    title: str
    artist: str
    price: float

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "album with ID '9' was not found",
            "details": {"resource": "album", "resource_id": "9"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    memory_albums: int = Field(description="Albums currently held by the memory store")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# OpenAPI Helpers
# ══════════════════════════════════════════════════════════════════════════


def upload_request_body() -> dict:
    """
    OpenAPI requestBody for the upload endpoints.

    The routes read the raw body themselves (see AlbumService.parse_upload),
    so FastAPI cannot infer the schema; this documents both accepted shapes.
    """
    album_schema = AlbumCreate.model_json_schema()
    return {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "oneOf": [
                        album_schema,
                        {"type": "array", "items": album_schema, "minItems": 1},
                    ]
                }
            }
        },
    }
