"""Observability — structured JSON logs and per-request access logging.

Invariants:
    - Every log line carries timestamp, level, logger and message
    - request_id is attached to every record emitted while a request is in flight
    - X-Request-Id is echoed back (client value kept, otherwise generated)
    - One access line per /api/ request: method, path, status_code, duration_ms
    - Uncaught exceptions are rendered inside the middleware, so 500s keep the request id

Design Decisions:
    - ContextVar for request_id: log calls deep in the use-case need no plumbing
    - Access logging as Starlette middleware, outermost after CORS
"""

import json
import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-Id"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

_EXTRA_FIELDS = (
    "request_id", "category_id", "error_code", "operation",
    "method", "path", "status_code", "duration_ms",
)

access_logger = logging.getLogger("catalog.access")


def current_request_id() -> str | None:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Stamp the in-flight request id onto records that lack one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = _request_id.get()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key])
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request id and emit an access log line for API calls.

    on_error renders uncaught exceptions while the request id is still bound,
    so 500 responses carry the header, the body id and an access line.
    """

    def __init__(
        self,
        app: ASGIApp,
        on_error: Callable[[Request, Exception], Awaitable[Response]],
    ):
        super().__init__(app)
        self._on_error = on_error

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = _request_id.set(request_id)
        request.state.request_id = request_id
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                response = await self._on_error(request, exc)
            response.headers[REQUEST_ID_HEADER] = request_id

            if request.url.path.startswith("/api/"):
                access_logger.info(
                    f"{request.method} {request.url.path} {response.status_code}",
                    extra={
                        "request_id": request_id,
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": response.status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
        finally:
            _request_id.reset(token)
        return response


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single root handler; repeated calls replace it."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    for existing in [h for h in root.handlers if getattr(h, "_catalog", False)]:
        root.removeHandler(existing)
    handler._catalog = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
