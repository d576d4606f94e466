from __future__ import annotations

from typing import Any

from fastapi.routing import APIRoute
from starlette.routing import Match


# Advertised in the OpenAPI schema; matching itself accepts any verb.
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


class AnyMethodRoute(APIRoute):
    """Route that serves every HTTP method, including non-standard ones."""

    def matches(self, scope: dict[str, Any]) -> tuple[Match, dict[str, Any]]:
        match, child_scope = super().matches(scope)
        # PARTIAL means the path matched but the method is not listed.
        if match == Match.PARTIAL:
            return Match.FULL, child_scope
        return match, child_scope
