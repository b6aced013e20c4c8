"""Error Hierarchy — typed, categorized exceptions for all mock server failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) never terminate the process
    - to_response() produces the REST error envelope used by every handler
    - Startup errors (RoutesFileError) are the only ones allowed to abort the process

Design Decisions:
    - Single hierarchy with MockServerError base: one FastAPI handler catches all
    - ErrorContext as dataclass: request details for observability, not coupled to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    method: str | None = None
    path: str | None = None


class MockServerError(Exception):
    """Base exception for all mock server errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "method": self.context.method,
                    "path": self.context.path,
                },
            }
        }

    def headers(self) -> dict[str, str] | None:
        """Extra response headers for this error, if any."""
        return None


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidStatusCodeError(MockServerError):
    """Requested status code is not a three-digit integer in [100, 599]."""
    def __init__(self, raw_code: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{raw_code}' is not a valid HTTP status code (expected 100-599)",
            "INVALID_STATUS_CODE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.raw_code = raw_code


class RouteValidationError(MockServerError):
    """A single route registration entry is malformed."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Invalid route entry: {'; '.join(errors)}",
            "INVALID_ROUTE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors = errors


class RoutePayloadError(MockServerError):
    """Route registration body is not a JSON array or object."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ROUTE_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class RouteNotFoundError(MockServerError):
    """No built-in or registered route matches the request."""
    def __init__(self, method: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.method = method
        ctx.path = path
        super().__init__(
            f"No route registered for {method} {path}",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


class MethodNotAllowedError(MockServerError):
    """Built-in path requested with a method it does not serve."""
    def __init__(
        self, method: str, path: str, allowed: list[str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.method = method
        ctx.path = path
        super().__init__(
            f"{method} is not allowed on {path} (allowed: {', '.join(allowed)})",
            "METHOD_NOT_ALLOWED", ErrorCategory.METHOD_NOT_ALLOWED,
            ErrorSeverity.INFO, ctx, 405,
        )
        self.allowed = allowed

    def headers(self) -> dict[str, str]:
        return {"Allow": ", ".join(self.allowed)}


# ─── Startup Errors ─────────────────────────────────────────────

class RoutesFileError(MockServerError):
    """Startup routes file is missing or malformed."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Routes file '{path}': {message}",
            "ROUTES_FILE_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.path = path
