"""Error Handlers — map every failure to the {message, error} envelope.

Invariants:
    - CatalogError → its own http_status and to_response() body
    - RequestValidationError (body, path or query) → 400 listing every issue
    - Anything else → 500 "Internal server error"; exception text only in logs
    - Error bodies carry the request id when one is bound
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.core.errors import CatalogError, ErrorCategory, ErrorSeverity
from catalog.infrastructure.observability import current_request_id

logger = logging.getLogger(__name__)


def _envelope(message: str, error: dict) -> dict:
    request_id = current_request_id()
    if request_id:
        error["request_id"] = request_id
    return {"message": message, "error": error}


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.INFO
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    body = exc.to_response()
    return JSONResponse(
        status_code=exc.http_status,
        content=_envelope(body["message"], body["error"]),
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.info(
        f"Rejected request with {len(details)} issue(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    summary = "; ".join(f"{d['field']}: {d['message']}" for d in details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(summary or "Invalid request data", {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        }),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope("Internal server error", {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        }),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
