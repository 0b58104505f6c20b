# Routes package init
"""
Album Catalog: API Routes Package
===================================

Route Inventory:
    - albums.py:  GET  /albums           (list, memory store)
                  GET  /albums/{id}      (get one, memory store)
                  POST /upload           (upload one or many, memory store)
    - db.py:      GET  /db               (list, database)
                  GET  /db/{id}          (get one, database)
                  POST /db/upload        (upload one or many, database)
    - health.py:  GET  /health           (service health check)

Routes stay thin: read the request, call AlbumService with the right store,
return the result. Errors are raised as exceptions and formatted by the
global handlers in main.py.
"""
