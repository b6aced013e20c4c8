"""Route Types — keys, definitions and entry parsing for the dynamic route table.

Invariants:
    - RouteKey.method is always upper case and one of HttpMethod
    - RouteKey.path always starts with "/" (no wildcards, no parameters)
    - RouteDefinition.code is bounded 100–599
    - RouteDefinition is frozen: a published definition never changes in place

Design Decisions:
    - Frozen dataclasses over dicts: a reader holding a definition can never see
      a half-updated one, replacement is a single reference swap
    - parse_route_entry collects every problem of an entry before raising, so the
      registration report lists all of them at once
    - Defaults (GET, "OK", 200) match what a bare {"path": ...} registration meant
      in earlier releases of this server
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from mockserver.core.errors import RouteValidationError


MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599

DEFAULT_METHOD = "GET"
DEFAULT_RESPONSE = "OK"
DEFAULT_CODE = 200


class HttpMethod(str, Enum):
    """Methods a dynamic route may be registered for."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Every standard method: "any method" built-ins and the registry fallback
# accept these; TRACE and CONNECT are never registrable
HTTP_METHODS = [m.value for m in HttpMethod] + ["TRACE", "CONNECT"]

# Methods whose registered responses are served without a body
BODYLESS_METHODS = frozenset({HttpMethod.DELETE.value, HttpMethod.HEAD.value})


@dataclass(frozen=True)
class RouteKey:
    """(method, path) — unique identity of a registered route."""
    method: str
    path: str

    @classmethod
    def of(cls, method: str, path: str) -> "RouteKey":
        return cls(method=method.upper(), path=path)

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True)
class RouteDefinition:
    """What a registered route answers with."""
    code: int
    body: bytes = b""
    error: bool = False


def is_valid_status_code(code: int) -> bool:
    return MIN_STATUS_CODE <= code <= MAX_STATUS_CODE


def status_allows_body(code: int) -> bool:
    """1xx, 204 and 304 responses must not carry a body."""
    return code >= 200 and code not in (204, 304)


def parse_route_entry(raw: Any) -> tuple[RouteKey, RouteDefinition]:
    """Validate one registration entry and build its key and definition.

    Accepts the wire shape {path, method, response, code, error}. Raises
    RouteValidationError listing every problem found.
    """
    if not isinstance(raw, Mapping):
        raise RouteValidationError(["entry must be a JSON object"])

    errors: list[str] = []

    path = raw.get("path")
    if path is None or path == "":
        errors.append("path is required")
    elif not isinstance(path, str):
        errors.append("path must be a string")
    elif not path.startswith("/"):
        errors.append("path must start with '/'")

    method = raw.get("method", DEFAULT_METHOD)
    if not isinstance(method, str):
        errors.append("method must be a string")
    else:
        method = method.upper()
        if method not in HttpMethod.__members__:
            allowed = ", ".join(m.value for m in HttpMethod)
            errors.append(f"method '{method}' is not one of {allowed}")

    code = raw.get("code", DEFAULT_CODE)
    # bool is an int subclass; true/false is never a status code
    if isinstance(code, bool) or not isinstance(code, int):
        errors.append("code must be an integer")
    elif not is_valid_status_code(code):
        errors.append(
            f"code {code} is outside {MIN_STATUS_CODE}-{MAX_STATUS_CODE}",
        )

    response = raw.get("response", DEFAULT_RESPONSE)
    if response is None:
        response = ""
    if not isinstance(response, str):
        errors.append("response must be a string")

    error = raw.get("error", False)
    if not isinstance(error, bool):
        errors.append("error must be a boolean")

    if errors:
        raise RouteValidationError(errors)

    return (
        RouteKey(method=method, path=path),
        RouteDefinition(code=code, body=response.encode("utf-8"), error=error),
    )
