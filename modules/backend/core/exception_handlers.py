"""
Exception Handlers.

Convert exceptions raised anywhere below the routers into the standard
error envelope ``{success: false, data: null, error, metadata}``.

    ApplicationError subclasses  -> status from EXCEPTION_STATUS_MAP
    RequestValidationError       -> 422 VAL_REQUEST_INVALID
    anything else                -> 500 SYS_INTERNAL_ERROR, details hidden

Usage:
    from modules.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from modules.backend.core.logging import get_logger
from modules.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    AuthenticationError: 401,
    ConflictError: 409,
    StorageError: 502,
    DatabaseError: 503,
}


def _get_request_id(request: Request) -> str | None:
    """Request ID set by the middleware, else the raw header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details or None),
        metadata=ResponseMetadata(request_id=_get_request_id(request)),
    )
    # Bearer challenge on every 401
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """Map an ApplicationError to its status code; unmapped subclasses give 500."""
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Server error" if status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "error": exc.message,
            "status": status_code,
            "path": request.url.path,
            "method": request.method,
            "request_id": _get_request_id(request),
        },
    )

    details = exc.details if isinstance(exc, ValidationError) else None
    return _error_response(request, status_code, exc.code, exc.message, details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Report malformed requests field by field.

    Each entry in ``details.validation_errors`` names the dotted location
    (e.g. ``body.content.0.type``), the message and the pydantic error type.
    """
    errors = exc.errors()
    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": _get_request_id(request),
        },
    )

    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in errors
    ]
    return _error_response(
        request,
        422,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        {"validation_errors": validation_errors},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log the traceback and return a generic 500 without internal details."""
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": _get_request_id(request),
        },
    )
    return _error_response(request, 500, "SYS_INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the three handlers on ``app``."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
