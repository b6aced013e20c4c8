"""Dynamic Dispatch — built-in precedence and methods outside the registrable set.

Tests cover:
    - Built-in route table comes from the built-in routers themselves
    - builtin_methods_for reports the methods a built-in path serves
    - TRACE reaches "any method" built-ins and the registry fallback
    - Non-standard methods get the error envelope, never a bare {"detail"} body
"""

import pytest
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from mockserver.api.error_handlers import from_http_exception
from mockserver.api.routes.dynamic_dispatch import builtin_methods_for
from mockserver.core.errors import MethodNotAllowedError, RouteNotFoundError


def _request(app, method: str, path: str) -> Request:
    return Request({
        "type": "http",
        "app": app,
        "method": method,
        "path": path,
        "root_path": "",
        "scheme": "http",
        "server": ("test", 80),
        "query_string": b"",
        "headers": [],
    })


def test_builtin_routes_cover_every_builtin_path(app):
    paths = {route.path for route in app.state.builtin_routes}
    assert paths == {
        "/healthz", "/host", "/echo", "/status/{code}", "/errors", "/routes",
    }


@pytest.mark.parametrize("path, expected", [
    ("/echo", ["POST"]),
    ("/healthz", ["GET"]),
    ("/routes", ["GET", "POST", "PUT"]),
    ("/nowhere", []),
    ("/echo/deeper", []),
])
def test_builtin_methods_for(app, path, expected):
    assert builtin_methods_for(_request(app, "DELETE", path)) == expected


@pytest.mark.asyncio
async def test_trace_unregistered_path_is_404(client):
    response = await client.request("TRACE", "/nowhere")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ROUTE_NOT_FOUND"


@pytest.mark.asyncio
async def test_trace_status(client):
    response = await client.request("TRACE", "/status/200")
    assert response.status_code == 200
    assert response.content == b""


@pytest.mark.asyncio
async def test_trace_errors(client, status_picker):
    response = await client.request("TRACE", "/errors")
    allowed = set(status_picker.error_codes) | {status_picker.success_code}
    assert response.status_code in allowed


@pytest.mark.asyncio
async def test_trace_on_post_only_builtin_is_405(client):
    response = await client.request("TRACE", "/echo")
    assert response.status_code == 405
    assert response.headers["allow"] == "POST"
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/nowhere", "/echo", "/status/200"])
async def test_nonstandard_method_uses_error_envelope(client, path):
    response = await client.request("FOO", path)
    assert response.status_code == 405
    body = response.json()
    assert "detail" not in body
    assert body["error"]["code"] == "METHOD_NOT_ALLOWED"
    assert body["error"]["context"] == {"method": "FOO", "path": path}
    assert "allow" in response.headers


def test_http_exception_405_maps_to_method_not_allowed(app):
    exc = StarletteHTTPException(405, headers={"Allow": "GET, POST"})
    err = from_http_exception(_request(app, "FOO", "/x"), exc)
    assert isinstance(err, MethodNotAllowedError)
    assert err.allowed == ["GET", "POST"]
    assert err.headers() == {"Allow": "GET, POST"}


def test_http_exception_404_maps_to_route_not_found(app):
    err = from_http_exception(
        _request(app, "GET", "/x"), StarletteHTTPException(404),
    )
    assert isinstance(err, RouteNotFoundError)
    assert err.to_response()["error"]["context"] == {"method": "GET", "path": "/x"}


def test_other_http_exception_keeps_status(app):
    err = from_http_exception(
        _request(app, "GET", "/x"), StarletteHTTPException(413, "Too large"),
    )
    assert err.http_status == 413
    assert err.code == "HTTP_ERROR"
    assert err.message == "Too large"
