"""Health & Host — liveness and host identification endpoints.

Invariants:
    - GET /healthz always returns 200 "OK" if the process is up, whatever the registry holds
    - GET /host returns the machine's host name as plain text
"""

import logging
import socket

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz", response_class=PlainTextResponse)
async def healthz():
    """Basic liveness check."""
    return PlainTextResponse("OK")


@router.get("/host", response_class=PlainTextResponse)
async def host():
    """Host name of the machine serving the request."""
    return PlainTextResponse(socket.gethostname())
