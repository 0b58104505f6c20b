"""
Album Catalog: JSON Response Classes
======================================

What:  Indented JSON rendering for API responses.
How:   IndentedJSONResponse renders with a 4-space indent. The application
       uses it as its default response class when settings.pretty_json is
       on, and falls back to Starlette's compact JSONResponse otherwise.
"""

import json
from typing import Any, Type

from fastapi.responses import JSONResponse

from album_catalog.config import settings


class IndentedJSONResponse(JSONResponse):
    """JSONResponse rendered with a 4-space indent."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=4,
        ).encode("utf-8")


def json_response_class() -> Type[JSONResponse]:
    """Response class matching the configured JSON style."""
    return IndentedJSONResponse if settings.pretty_json else JSONResponse
