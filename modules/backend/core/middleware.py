"""
Request Context Middleware.

Middleware for request tracking, timing, and structlog context propagation.
"""

import uuid
from datetime import datetime, timezone

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from modules.backend.core.logging import get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    - Generates or propagates request ID (X-Request-ID header)
    - Records request timing (X-Response-Time header)
    - Binds request_id, method and path to structlog for every log in the request
    - Stores request_id and start_time in request.state
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = datetime.now(timezone.utc).replace(tzinfo=None)

        request.state.request_id = request_id
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source="web",
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)

            duration_ms = _elapsed_ms(start_time)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        except Exception as exc:
            duration_ms = _elapsed_ms(start_time)
            logger.error(
                "Request failed with exception",
                extra={"duration_ms": duration_ms, "error_type": type(exc).__name__},
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "source", "method", "path")


def _elapsed_ms(start_time: datetime) -> int:
    end_time = datetime.now(timezone.utc).replace(tzinfo=None)
    return int((end_time - start_time).total_seconds() * 1000)
