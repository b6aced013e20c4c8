"""Structured Logging — JSON formatter, setup and per-request access log.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, duration_ms, error_code, route_count)
      surfaced when present
    - JSON format by default, human-readable with log_format="text"
    - setup_logging is idempotent: calling it twice never duplicates handlers

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
    - Access log as HTTP middleware: one line per request, including 404s and
      requests answered by exception handlers
"""

import logging
import json
import time
from datetime import datetime, timezone

from fastapi import Request

EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms",
    "error_code", "route_count",
)

access_logger = logging.getLogger("mockserver.access")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.set_name("mockserver")
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == "mockserver":
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def access_log_middleware(request: Request, call_next):
    """Log method, path, status and latency of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    access_logger.info(
        f"{request.method} {request.url.path} {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response
