"""Mock Server API — FastAPI application factory and entry point.

Invariants:
    - Built-in routers registered before dynamic_dispatch: built-ins always win
    - Each app owns exactly one RouteRegistry and one StatusPicker (app.state)
    - Global error handlers map MockServerError → structured JSON responses
    - Routes file (if configured) loaded on startup via lifespan; a bad file aborts startup

Design Decisions:
    - create_app() factory over a bare module-level app: tests build isolated apps,
      each with its own registry; `app` below is the default instance for uvicorn
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - OpenAPI/docs endpoints disabled: every path outside the built-ins belongs to
      the registry
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mockserver.api.error_handlers import register_error_handlers
from mockserver.api.routes import builtins, dynamic_dispatch, health, route_management
from mockserver.config import Settings, get_settings
from mockserver.core.route_registry import RouteRegistry
from mockserver.core.status_picker import StatusPicker
from mockserver.infrastructure.observability import access_log_middleware, setup_logging
from mockserver.infrastructure.routes_file import load_routes_file, seed_registry

logger = logging.getLogger(__name__)

BUILTIN_ROUTERS = (health.router, builtins.router, route_management.router)


def build_status_picker(
    settings: Settings, error_percentage: int | None = None,
) -> StatusPicker:
    return StatusPicker(
        error_percentage=(
            settings.error_percentage if error_percentage is None
            else error_percentage
        ),
        error_codes=tuple(settings.error_codes),
        success_code=settings.success_code,
    )


def create_app(
    settings: Settings | None = None,
    registry: RouteRegistry | None = None,
    status_picker: StatusPicker | None = None,
) -> FastAPI:
    """Build a mock server app with its own registry and status picker."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        if settings.routes_file:
            routes_file = load_routes_file(settings.routes_file)
            seed_registry(app.state.registry, routes_file)
            if routes_file.error_percentage is not None and status_picker is None:
                app.state.status_picker = build_status_picker(
                    settings, routes_file.error_percentage,
                )
        logger.info(
            f"Mock server started with {len(app.state.registry)} route(s), "
            f"error percentage {app.state.status_picker.error_percentage}",
            extra={"route_count": len(app.state.registry)},
        )
        yield
        logger.info("Mock server shutting down")

    app = FastAPI(
        title="Mock HTTP Server",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.registry = registry if registry is not None else RouteRegistry()
    app.state.status_picker = status_picker or build_status_picker(settings)

    if settings.access_log:
        app.middleware("http")(access_log_middleware)

    # Order is priority: built-ins first, registry fallback last
    for builtin_router in BUILTIN_ROUTERS:
        app.include_router(builtin_router)
    app.include_router(dynamic_dispatch.router)
    app.state.builtin_routes = [
        route for builtin_router in BUILTIN_ROUTERS
        for route in builtin_router.routes
    ]

    register_error_handlers(app)
    return app


app = create_app()
