"""
Translation of errors into HTTP responses.

Every error response has the same body:

    {
        "timestamp": "<ISO-8601>",
        "status": <http_status_int>,
        "error": "<HTTP reason phrase>",
        "message": "<what went wrong>",
        "path": "<request path>"
    }

Unexpected exceptions never leak their text; they are logged server-side.
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.db.schemas import ErrorResponse
from common import AppError, NotFoundError, MalformedInputError, get_app_logger

logger = get_app_logger(__name__)

# Checked in order; the first matching class wins
ERROR_STATUS_TABLE: tuple[tuple[type[AppError], HTTPStatus], ...] = (
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (MalformedInputError, HTTPStatus.BAD_REQUEST),
)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def status_for(exc: AppError) -> HTTPStatus:
    """Resolve the HTTP status for a domain error."""
    for error_cls, http_status in ERROR_STATUS_TABLE:
        if isinstance(exc, error_cls):
            return http_status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def error_response(request: Request, http_status: HTTPStatus, message: str) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=http_status.value,
        error=http_status.phrase,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=http_status.value, content=body.model_dump(mode="json"))


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(loc) for loc in error.get("loc", ()) if loc != "body")
        msg = error.get("msg", "invalid value")
        parts.append(f"{location}: {msg}" if location else msg)
    return "; ".join(parts) or "Malformed request"


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the given FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        http_status = status_for(exc)
        log = logger.error if http_status >= 500 else logger.warning
        log(
            f"Domain Error: {exc.code}",
            path=request.url.path,
            error_code=exc.code,
            message=exc.message,
        )
        return error_response(request, http_status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = MalformedInputError(_describe_validation_errors(list(exc.errors())))
        logger.warning("Malformed request", path=request.url.path, detail=error.message)
        return error_response(request, status_for(error), error.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        http_status = HTTPStatus(exc.status_code)
        message = str(exc.detail) if exc.detail else http_status.description
        response = error_response(request, http_status, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.critical(
            "Unexpected error",
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return error_response(request, HTTPStatus.INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


__all__ = [
    "ERROR_STATUS_TABLE",
    "GENERIC_ERROR_MESSAGE",
    "register_error_handlers",
    "status_for",
]
