"""Shared fixtures — isolated settings, registry and ASGI client per test.

Invariants:
    - Every test gets a fresh RouteRegistry (no state leaks between tests)
    - Settings never read a developer's .env file or server env vars

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the full middleware and
      exception-handler stack without opening a socket
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient

from mockserver.config import Settings
from mockserver.core.route_registry import RouteRegistry
from mockserver.core.status_picker import StatusPicker
from mockserver.main import create_app

SETTINGS_ENV_VARS = (
    "HOST", "PORT", "ROUTES_FILE", "ERROR_PERCENTAGE", "ERROR_CODES",
    "SUCCESS_CODE", "LOG_LEVEL", "LOG_FORMAT", "ACCESS_LOG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(_env_file=None, log_format="text")


@pytest.fixture
def registry():
    return RouteRegistry()


@pytest.fixture
def status_picker():
    return StatusPicker(error_percentage=50, rng=random.Random(1234))


@pytest.fixture
def app(settings, registry, status_picker):
    return create_app(settings, registry=registry, status_picker=status_picker)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
