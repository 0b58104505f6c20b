"""
Album Catalog: Application Package Initializer
================================================

What: Marks the `album_catalog` directory as a Python package.
Who:  Imported by uvicorn (`album_catalog.main:app`), Alembic and pytest.

Architecture Note:
    The service follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (upload binding, stores) │  ← parse, assign IDs, persist
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Two storage backends sit behind the same store interface:
    an in-memory list (`/albums`, `/upload`) and a SQLite table
    (`/db`, `/db/upload`).
"""

__version__ = "1.0.0"
