"""
Notefile Backend — Indented JSON Response
==========================================

What:  JSONResponse subclass that renders bodies with a 2-space indent.
Who:   Set as the app's default_response_class and used by every exception
       handler, so success and error bodies share one format.
"""

import json
from typing import Any

from fastapi.responses import JSONResponse


class PrettyJSONResponse(JSONResponse):
    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode("utf-8")
