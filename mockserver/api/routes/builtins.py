"""Built-in Endpoints — echo, requested status and randomized status.

Invariants:
    - POST /echo returns the request body byte-for-byte with status 200
    - /status/{code} answers with exactly {code} for any three-digit code in 100–599,
      400 otherwise; body always empty
    - /errors picks a status per request via StatusPicker; nothing shared between requests
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from mockserver.core.errors import ErrorContext, InvalidStatusCodeError
from mockserver.core.route_types import HTTP_METHODS, is_valid_status_code
from mockserver.core.status_picker import StatusPicker
from mockserver.api.dependencies import get_status_picker

logger = logging.getLogger(__name__)
router = APIRouter(tags=["builtins"])


@router.post("/echo")
async def echo(request: Request):
    """Return the request body verbatim, keeping its content type."""
    body = await request.body()
    return Response(
        content=body,
        status_code=200,
        media_type=request.headers.get("content-type", "text/plain"),
    )


def parse_status_code(raw: str, context: ErrorContext | None = None) -> int:
    """Strict parse: exactly three ASCII digits, within 100–599."""
    if len(raw) != 3 or not raw.isascii() or not raw.isdigit():
        raise InvalidStatusCodeError(raw, context)
    code = int(raw)
    if not is_valid_status_code(code):
        raise InvalidStatusCodeError(raw, context)
    return code


@router.api_route("/status/{code}", methods=HTTP_METHODS)
async def status_code(code: str, request: Request):
    """Respond with the status code named in the path."""
    parsed = parse_status_code(
        code, ErrorContext(method=request.method, path=request.url.path),
    )
    return Response(status_code=parsed)


@router.api_route("/errors", methods=HTTP_METHODS)
async def errors(picker: StatusPicker = Depends(get_status_picker)):
    """Respond with a pseudo-randomly chosen success or error status."""
    code = picker.pick()
    logger.debug(f"/errors picked {code}")
    return Response(status_code=code)
