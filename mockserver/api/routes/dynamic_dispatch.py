"""Dynamic Dispatch — catch-all fallback that serves routes from the registry.

Invariants:
    - Reached only when no built-in route fully matches (router is included last)
    - A built-in path requested with another method is 405, never a registry hit
    - Registry hit -> registered code and body; miss -> 404
    - Routes flagged error=true answer with a StatusPicker code and no body
    - DELETE/HEAD routes and 1xx/204/304 codes answer without a body

Design Decisions:
    - Built-in collisions detected by matching the built-in routers' own routes
      (app.state.builtin_routes), so the built-in table lives in one place and
      does not depend on how FastAPI nests included routers
    - request.url.path used as the key, not the path parameter: keeps the leading
      slash and excludes the query string
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.routing import Match

from mockserver.core.errors import MethodNotAllowedError, RouteNotFoundError
from mockserver.core.route_registry import RouteRegistry
from mockserver.core.route_types import (
    HTTP_METHODS, BODYLESS_METHODS, RouteDefinition, status_allows_body,
)
from mockserver.core.status_picker import StatusPicker
from mockserver.api.dependencies import get_registry, get_status_picker

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dynamic"])


def builtin_methods_for(request: Request) -> list[str]:
    """Methods served by built-in routes whose path matches this request's path."""
    allowed: set[str] = set()
    for route in request.app.state.builtin_routes:
        match, _ = route.matches(request.scope)
        if match != Match.NONE:
            allowed.update(route.methods or ())
    return sorted(allowed)


def build_response(
    method: str, definition: RouteDefinition, picker: StatusPicker,
) -> Response:
    if definition.error:
        return Response(status_code=picker.pick())
    if method in BODYLESS_METHODS or not status_allows_body(definition.code):
        return Response(status_code=definition.code)
    return Response(
        content=definition.body,
        status_code=definition.code,
        media_type="text/plain",
    )


@router.api_route("/{path:path}", methods=HTTP_METHODS, include_in_schema=False)
async def dispatch(
    request: Request,
    registry: RouteRegistry = Depends(get_registry),
    picker: StatusPicker = Depends(get_status_picker),
):
    """Serve a registered route, or 404/405."""
    method = request.method
    url_path = request.url.path

    allowed = builtin_methods_for(request)
    if allowed:
        logger.warning(f"Method {method} not allowed for built-in path {url_path}")
        raise MethodNotAllowedError(method, url_path, allowed)

    definition = registry.lookup(method, url_path)
    if definition is None:
        logger.warning(f"Route not found for {method} {url_path}")
        raise RouteNotFoundError(method, url_path)

    logger.debug(f"Handling dynamic route: {method} {url_path}")
    return build_response(method, definition, picker)
