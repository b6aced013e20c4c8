"""Command-line entry point: `python -m mockserver` or the `mockserver` script.

Flags override the environment/.env settings for this run only. A routes file's
`port` and `hostname` sit between the two: they beat the environment, a flag
beats them.
"""

import argparse

import uvicorn

from mockserver.config import Settings
from mockserver.infrastructure.routes_file import load_routes_file
from mockserver.main import create_app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mockserver",
        description="Configurable HTTP mock server with runtime route registration.",
    )
    parser.add_argument("--host", help="interface to bind (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="port to listen on (default: PORT or 8080)")
    parser.add_argument("--routes-file", help="YAML file with routes to load at startup")
    parser.add_argument(
        "--error-percentage", type=int,
        help="chance (0-100) that /errors answers with an error code",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-format", choices=["json", "text"])
    return parser.parse_args(argv)


def resolve_bind(settings: Settings, overrides: dict) -> tuple[str, int]:
    """Host and port to serve on: flag, then routes file, then settings."""
    host, port = settings.host, settings.port
    if settings.routes_file:
        routes_file = load_routes_file(settings.routes_file)
        if routes_file.host is not None and "host" not in overrides:
            host = routes_file.host
        if routes_file.port is not None and "port" not in overrides:
            port = routes_file.port
    return host, port


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    overrides = {
        name: value for name, value in vars(args).items() if value is not None
    }
    # init kwargs take priority over environment and .env values
    settings = Settings(**overrides)
    host, port = resolve_bind(settings, overrides)
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
