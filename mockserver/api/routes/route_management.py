"""Route Management — register and list dynamic routes at runtime.

Invariants:
    - POST/PUT /routes accepts a JSON array of entries, or a single entry object
    - Registration always answers 200 with a report; nothing is inserted when the
      body is not JSON or is JSON of another shape
    - Bad entries never fail the request: they are listed under `rejected`
    - A bad body is one rejection with index null carrying the parse error
    - Registrations on built-in paths are accepted but never served

Design Decisions:
    - Body parsed by hand instead of a pydantic body model: a model would reject the
      whole batch on the first bad entry
    - An unusable body is reported, not raised: a mock server's clients should read
      one response shape from /routes whatever they sent
"""

import json
import logging

from fastapi import APIRouter, Depends, Request

from mockserver.core.errors import ErrorContext, RoutePayloadError
from mockserver.core.route_registry import RouteRegistry
from mockserver.schemas.route import (
    RegistrationResponse, RouteListResponse, RouteView,
)
from mockserver.api.dependencies import get_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/routes", tags=["routes"])


async def _read_entries(request: Request) -> list:
    context = ErrorContext(method=request.method, path=request.url.path)
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RoutePayloadError(f"Body is not valid JSON: {e}", context)
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        return payload
    raise RoutePayloadError(
        "Body must be a JSON array of route objects or a single route object",
        context,
    )


@router.api_route("", methods=["POST", "PUT"], response_model=RegistrationResponse)
async def register_routes(
    request: Request, registry: RouteRegistry = Depends(get_registry),
):
    """Insert every valid entry; report inserted and rejected ones."""
    try:
        entries = await _read_entries(request)
    except RoutePayloadError as e:
        logger.warning(
            f"Route registration rejected: {e.message}",
            extra={"error_code": e.code, "path": request.url.path},
        )
        return RegistrationResponse.rejected_payload(e.message)

    report = registry.insert(entries)
    logger.info(
        f"Route registration: {report.inserted} inserted, "
        f"{len(report.rejected)} rejected",
        extra={"route_count": len(registry)},
    )
    return RegistrationResponse.from_report(report)


@router.get("", response_model=RouteListResponse)
async def list_routes(registry: RouteRegistry = Depends(get_registry)):
    """Every registered route, sorted by path then method."""
    routes = [RouteView.from_entry(k, d) for k, d in registry.snapshot()]
    return RouteListResponse(count=len(routes), routes=routes)
