"""Request Dependencies — hand the app-owned registry and status picker to handlers.

Invariants:
    - Handlers never reach for module-level state; everything comes from app.state
"""

from fastapi import Request

from mockserver.core.route_registry import RouteRegistry
from mockserver.core.status_picker import StatusPicker


def get_registry(request: Request) -> RouteRegistry:
    return request.app.state.registry


def get_status_picker(request: Request) -> StatusPicker:
    return request.app.state.status_picker
