"""Routes File — YAML startup configuration that seeds the route registry.

Invariants:
    - Missing file, unreadable file, YAML syntax error or missing `routes` key
      raise RoutesFileError (startup aborts, never a half-configured server)
    - Individual bad route entries are rejected and logged, not fatal
    - `port` and `hostname` are optional; when present they are validated here and
      applied by the entry point unless a command-line flag overrides them
    - `routes` may be a list of entries or a mapping path -> entry; in the mapping
      form the key supplies `path` when the entry omits it

Design Decisions:
    - yaml.safe_load: the file is plain data, no Python object tags
    - Entries go through RouteRegistry.insert, the same path as POST /routes
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from mockserver.core.errors import RoutesFileError
from mockserver.core.route_registry import InsertReport, RouteRegistry

logger = logging.getLogger(__name__)


@dataclass
class RoutesFile:
    """Parsed contents of a routes file."""
    entries: list[Any] = field(default_factory=list)
    error_percentage: int | None = None
    port: int | None = None
    host: str | None = None


def load_routes_file(path: str | Path) -> RoutesFile:
    """Read and parse a routes file. Raises RoutesFileError on any file-level problem."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RoutesFileError(f"cannot be read ({e.strerror})", str(path))

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise RoutesFileError(f"invalid YAML: {e}", str(path))

    if not isinstance(data, dict):
        raise RoutesFileError("top level must be a mapping", str(path))
    if "routes" not in data:
        raise RoutesFileError("missing 'routes' key", str(path))

    return RoutesFile(
        entries=_normalize_routes(data["routes"], str(path)),
        error_percentage=_parse_error_percentage(
            data.get("error_percentage"), str(path),
        ),
        port=_parse_port(data.get("port"), str(path)),
        host=_parse_hostname(data.get("hostname"), str(path)),
    )


def _normalize_routes(routes: Any, path: str) -> list[Any]:
    if routes is None:
        return []
    if isinstance(routes, list):
        return routes
    if isinstance(routes, dict):
        entries = []
        for route_path, entry in routes.items():
            if isinstance(entry, dict) and "path" not in entry:
                entry = {**entry, "path": route_path}
            entries.append(entry)
        return entries
    raise RoutesFileError("'routes' must be a list or a mapping", path)


def _parse_error_percentage(value: Any, path: str) -> int | None:
    """Accepts an int or a numeric string ("30"), bounded 0–100."""
    if value is None:
        return None
    try:
        pct = int(value)
    except (TypeError, ValueError):
        raise RoutesFileError(
            f"error_percentage must be an integer, got {value!r}", path,
        )
    if not 0 <= pct <= 100:
        raise RoutesFileError(
            f"error_percentage must be 0-100, got {pct}", path,
        )
    return pct


def _parse_port(value: Any, path: str) -> int | None:
    """Accepts an int or a numeric string ("8081"), bounded 1–65535."""
    if value is None:
        return None
    # bool is an int subclass; `port: yes` is a typo, not port 1
    if isinstance(value, bool):
        raise RoutesFileError(f"port must be an integer, got {value!r}", path)
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise RoutesFileError(f"port must be an integer, got {value!r}", path)
    if not 1 <= port <= 65535:
        raise RoutesFileError(f"port must be 1-65535, got {port}", path)
    return port


def _parse_hostname(value: Any, path: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise RoutesFileError(
            f"hostname must be a non-empty string, got {value!r}", path,
        )
    return value.strip()


def seed_registry(registry: RouteRegistry, routes_file: RoutesFile) -> InsertReport:
    """Insert the file's routes and log what was loaded."""
    report = registry.insert(routes_file.entries)
    for key, definition in registry.snapshot():
        logger.info(
            f"Loaded route: {key} -> {definition.code}",
            extra={"method": key.method, "path": key.path},
        )
    if report.rejected:
        logger.warning(
            f"{len(report.rejected)} route(s) in routes file rejected",
            extra={"route_count": len(report.rejected)},
        )
    return report
