# Middleware package init
"""
Album Catalog: Middleware Package
===================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → Route Handler

    Request ID runs first so the access log line carries the request's ID.
    On the way out, Logging records status and duration and Request ID
    adds the X-Request-ID header.
"""
