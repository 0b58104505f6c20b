# Services package init
"""
Album Catalog: Services Layer
===============================

Service Inventory:
    - AlbumStore (abstract): storage contract for albums
    - MemoryAlbumStore: process-local list with sequential IDs
    - SqlAlbumStore: `albums` table through an async session
    - AlbumService: dual-shape upload binding and orchestration over a store

Routes pick the store; AlbumService is the same for both.
"""
