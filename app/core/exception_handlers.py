"""Global exception handlers for consistent error responses.

Every error leaves the API in the same envelope:

    {"error": {"code": ..., "message": ..., "request_id": ..., "details": ...}}

Mapping:
- ValidationAppError -> 400
- NotFoundAppError -> 404
- RequestValidationError (malformed body, path or query) -> 400
- anything else -> 500 with a generic message
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import AppError, NotFoundAppError, ValidationAppError
from app.core.logging import get_request_id

logger = logging.getLogger(__name__)


_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (NotFoundAppError, status.HTTP_404_NOT_FOUND),
    (ValidationAppError, status.HTTP_400_BAD_REQUEST),
)


def status_code_for(exc: AppError) -> int:
    """Return the HTTP status code for a domain error (400 when unmapped)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(
    status_code: int,
    *,
    code: str,
    message: str,
    details: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON error response in the API's standard envelope.

    Args:
        status_code: HTTP status code to send.
        code: Machine-readable error code.
        message: Human-readable message.
        details: Optional structured context; omitted from the body when empty.
        headers: Optional extra response headers.

    Returns:
        JSONResponse carrying the error envelope.
    """
    error_content: dict[str, Any] = {
        "code": code,
        "message": message,
        "request_id": get_request_id(),
    }
    if details:
        error_content["details"] = dict(details)

    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=dict(headers) if headers else None,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with the mapped status code and error details.
    """
    status_code = status_code_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return error_response(
        status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


def _collect_field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by dotted field location."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" marker
        loc = [str(part) for part in error.get("loc", ())][1:]
        field = ".".join(loc) or "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Turn FastAPI request validation failures into 400 responses."""
    errors = _collect_field_errors(exc)

    logger.warning(
        "request_validation_failed",
        extra={
            "fields": sorted(errors),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        code="validation_failed",
        message="Validation failed",
        details={"errors": errors},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure with its type for debugging while the client only
    receives a generic message (no stack traces or exception text).

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with status 500.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
        exc_info=exc,
    )

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="internal_server_error",
        message="An error occurred while processing your request",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with a FastAPI app.

    Safe to call more than once; later registrations replace earlier ones.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
