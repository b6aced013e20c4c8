"""Route Schemas — JSON views of registered routes and registration outcomes.

Invariants:
    - RouteView.response is the registered body decoded as UTF-8 (undecodable bytes replaced)
    - RegistrationResponse.inserted == len(RegistrationResponse.routes)
    - A payload-level rejection (index None) always comes with inserted == 0
"""

from pydantic import BaseModel, Field

from mockserver.core.route_registry import InsertReport
from mockserver.core.route_types import RouteDefinition, RouteKey


class RouteView(BaseModel):
    """One registered route as reported by GET /routes."""
    method: str
    path: str
    code: int = Field(ge=100, le=599)
    response: str
    error: bool = False

    @classmethod
    def from_entry(cls, key: RouteKey, definition: RouteDefinition) -> "RouteView":
        return cls(
            method=key.method,
            path=key.path,
            code=definition.code,
            response=definition.body.decode("utf-8", errors="replace"),
            error=definition.error,
        )


class AcceptedEntry(BaseModel):
    index: int = Field(ge=0)
    method: str
    path: str


class RejectedEntry(BaseModel):
    """Entry that was not stored, with every reason it failed.

    index is None when the whole body was unusable (not JSON, wrong shape).
    """
    index: int | None = Field(default=None, ge=0)
    errors: list[str]


class RegistrationResponse(BaseModel):
    """Result of POST /routes."""
    inserted: int = Field(ge=0)
    rejected: list[RejectedEntry]
    routes: list[AcceptedEntry]

    @classmethod
    def from_report(cls, report: InsertReport) -> "RegistrationResponse":
        return cls(
            inserted=report.inserted,
            rejected=[
                RejectedEntry(index=index, errors=errors)
                for index, errors in report.rejected
            ],
            routes=[
                AcceptedEntry(index=index, method=key.method, path=key.path)
                for index, key in report.accepted
            ],
        )

    @classmethod
    def rejected_payload(cls, reason: str) -> "RegistrationResponse":
        return cls(
            inserted=0,
            rejected=[RejectedEntry(index=None, errors=[reason])],
            routes=[],
        )


class RouteListResponse(BaseModel):
    """Result of GET /routes."""
    count: int = Field(ge=0)
    routes: list[RouteView]
