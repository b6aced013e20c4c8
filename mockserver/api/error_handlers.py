"""Error Handlers — global exception handlers for the mock server.

Invariants:
    - MockServerError → structured JSON with error code, message, severity (+ its headers)
    - Router-level HTTPException (405 for a non-standard method, 404) → the same
      envelope, mapped onto the MockServerError hierarchy
    - Exception (catch-all) → never leaks internal details
    - No request error propagates out of the app: every failure becomes a response

Design Decisions:
    - Three-layer handler: domain (MockServerError), router (Starlette HTTPException),
      catch-all (Exception)
    - 4xx domain errors logged at INFO, they are normal traffic for a mock server
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mockserver.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, MethodNotAllowedError,
    MockServerError, RouteNotFoundError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_mock_server_error_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app)


def _error_response(request: Request, exc: MockServerError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.INFO
    logger.log(
        level,
        f"MockServerError: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        headers=exc.headers(),
    )


def _register_mock_server_error_handler(app: FastAPI) -> None:
    """Register domain error handler."""

    @app.exception_handler(MockServerError)
    async def mock_server_error_handler(request: Request, exc: MockServerError):
        """Handle all mock server domain errors."""
        return _error_response(request, exc)


def from_http_exception(
    request: Request, exc: StarletteHTTPException,
) -> MockServerError:
    """Translate a router-raised HTTPException into the domain hierarchy."""
    method, path = request.method, request.url.path
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        allow = (exc.headers or {}).get("Allow", "")
        allowed = [m.strip() for m in allow.split(",") if m.strip()]
        return MethodNotAllowedError(method, path, allowed)
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return RouteNotFoundError(method, path)
    return MockServerError(
        str(exc.detail), "HTTP_ERROR",
        ErrorCategory.VALIDATION if exc.status_code < 500 else ErrorCategory.INTERNAL,
        ErrorSeverity.WARNING, ErrorContext(method=method, path=path),
        exc.status_code,
    )


def _register_http_exception_handler(app: FastAPI) -> None:
    """Register router-level HTTPException handler."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Router 404/405 (e.g. a non-standard method) in the standard envelope."""
        return _error_response(request, from_http_exception(request, exc))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
