"""API middleware: error mapping and request timing.

Registers exception handlers and a request timing middleware
on the FastAPI app.

  NotFoundError      -> 404
  RemoteFailureError -> 502
  anything else      -> 500
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog
from fastapi.responses import ORJSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pace_match.domain.errors import NotFoundError, RemoteFailureError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request, Response

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


async def _not_found_handler(
    _request: Request,
    exc: NotFoundError,
) -> ORJSONResponse:
    """Convert NotFoundError to a 404 response."""
    return ORJSONResponse(
        status_code=404,
        content={"detail": str(exc), "entity": exc.entity},
    )


async def _remote_failure_handler(
    _request: Request,
    exc: RemoteFailureError,
) -> ORJSONResponse:
    """Convert RemoteFailureError to a 502 response, keeping the store's message."""
    logger.warning(
        "remote_failure",
        operation=exc.operation,
        status_code=exc.status_code,
        error=exc.message,
    )
    return ORJSONResponse(
        status_code=502,
        content={
            "detail": exc.message,
            "operation": exc.operation,
            "upstream_status": exc.status_code,
        },
    )


async def _generic_error_handler(
    _request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Convert unhandled exceptions to a structured 500 response."""
    logger.error("unhandled_exception", exc_info=exc)
    return ORJSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "type": type(exc).__name__,
        },
    )


# ---------------------------------------------------------------------------
# Request timing middleware
# ---------------------------------------------------------------------------


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Adds an X-Request-Time-Ms header to every response."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        start_time = time.monotonic()
        response: Response = await call_next(request)
        elapsed_ms = (time.monotonic() - start_time) * 1000
        response.headers["X-Request-Time-Ms"] = f"{elapsed_ms:.1f}"
        return response


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register_middleware(app: FastAPI) -> None:
    """Attach all middleware and exception handlers to the app."""
    app.add_exception_handler(NotFoundError, _not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RemoteFailureError, _remote_failure_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_error_handler)
    app.add_middleware(RequestTimingMiddleware)
