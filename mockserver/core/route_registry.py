"""Route Registry — concurrency-safe in-memory table of dynamically registered routes.

Invariants:
    - One RouteDefinition per RouteKey; a later insert for the same key replaces it
    - Lookup is an exact (method, path) dict hit: no prefix matching, no normalisation
    - Readers never observe a partially written definition (frozen values, swapped under lock)
    - insert() never raises on bad entries: each one is accepted or rejected on its own

Design Decisions:
    - Explicitly owned object (one per app) instead of module-level state: tests run
      many independent registries side by side
    - threading.Lock over asyncio.Lock: handlers may run on the event loop or in the
      threadpool, and the critical sections are plain dict operations
    - Entries validated outside the lock, published in one critical section
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from threading import Lock
from typing import Any

from mockserver.core.errors import RouteValidationError
from mockserver.core.route_types import (
    HttpMethod, RouteDefinition, RouteKey, is_valid_status_code, parse_route_entry,
)

logger = logging.getLogger(__name__)


@dataclass
class InsertReport:
    """Outcome of a bulk insert — which entries were stored, which were rejected."""
    accepted: list[tuple[int, RouteKey]] = field(default_factory=list)
    rejected: list[tuple[int, list[str]]] = field(default_factory=list)

    @property
    def inserted(self) -> int:
        return len(self.accepted)

    @property
    def ok(self) -> bool:
        return not self.rejected


def _coerce_entry(entry: Any) -> tuple[RouteKey, RouteDefinition]:
    """Accept either a prebuilt (RouteKey, RouteDefinition) pair or a raw mapping."""
    if (
        isinstance(entry, tuple) and len(entry) == 2
        and isinstance(entry[0], RouteKey)
        and isinstance(entry[1], RouteDefinition)
    ):
        key, definition = entry
        errors = []
        if key.method not in HttpMethod.__members__:
            errors.append(f"method '{key.method}' is not supported")
        if not key.path.startswith("/"):
            errors.append("path must start with '/'")
        if not is_valid_status_code(definition.code):
            errors.append(f"code {definition.code} is outside 100-599")
        if errors:
            raise RouteValidationError(errors)
        return key, definition
    return parse_route_entry(entry)


class RouteRegistry:
    """Maps RouteKey -> RouteDefinition. Safe for concurrent readers and writers."""

    def __init__(self) -> None:
        self._routes: dict[RouteKey, RouteDefinition] = {}
        self._lock = Lock()

    def insert(self, entries: Iterable[Any]) -> InsertReport:
        """Add or replace every well-formed entry; report the malformed ones."""
        report = InsertReport()
        valid: list[tuple[RouteKey, RouteDefinition]] = []
        for index, entry in enumerate(entries):
            try:
                key, definition = _coerce_entry(entry)
            except RouteValidationError as e:
                logger.warning(
                    f"Rejected route entry #{index}: {'; '.join(e.errors)}",
                    extra={"error_code": e.code},
                )
                report.rejected.append((index, e.errors))
                continue
            valid.append((key, definition))
            report.accepted.append((index, key))

        with self._lock:
            for key, definition in valid:
                self._routes[key] = definition

        for _, key in report.accepted:
            logger.info(f"Registered route {key}")
        return report

    def lookup(self, method: str, path: str) -> RouteDefinition | None:
        """Exact match on (method, path); None when nothing is registered."""
        key = RouteKey.of(method, path)
        with self._lock:
            return self._routes.get(key)

    def snapshot(self) -> list[tuple[RouteKey, RouteDefinition]]:
        """Consistent copy of the table, sorted by path then method."""
        with self._lock:
            items = list(self._routes.items())
        return sorted(items, key=lambda item: (item[0].path, item[0].method))

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)
