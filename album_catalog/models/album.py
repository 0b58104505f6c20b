"""
Album Catalog: Album SQLAlchemy Model
=======================================

What:  ORM model representing the `albums` table.
How:   Inherits from the shared DeclarativeBase; Alembic and init_models()
       read this for the schema.
Who:   Used by SqlAlbumStore for reads and inserts.

Table Design:
    - id: autoincrement integer primary key, assigned by the database
    - created_at / updated_at: UTC bookkeeping timestamps
    - deleted_at: soft-delete marker; rows with a value are hidden from reads
    - title / artist / price: the album itself

    Only id, title, artist and price leave the service; see
    schemas.album.AlbumResponse.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from album_catalog.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Album(Base):
    """A stored album row."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    artist: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    __table_args__ = (
        Index("idx_albums_deleted_at", "deleted_at"),
    )

    def __repr__(self) -> str:
        return f"<Album(id={self.id}, title='{self.title}', artist='{self.artist}')>"
