"""
HTTP Middleware and Error Handlers
==================================

- ``CorrelationIDMiddleware``: reuses or mints ``X-Correlation-ID`` and echoes
  it on the response
- ``LoggingMiddleware``: one log line per request outcome with its duration
- exception handlers mapping ``ApplicationException`` subclasses to status
  codes, with a JSON body ``{detail, correlation_id, timestamp}``
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from helpdesk.config import settings
from helpdesk.core import (
    ApplicationException,
    ExternalServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Checked in order; the first matching base class decides the status
STATUS_BY_EXCEPTION = (
    (ResourceNotFoundException, 404),
    (ValidationException, 422),
    (ExternalServiceException, 503),
)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation id for log tracing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs the outcome and duration of every HTTP request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        context = {
            "correlation_id": _correlation_id(request),
            "method": request.method,
            "path": request.url.path,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            context["duration_ms"] = int((time.perf_counter() - started) * 1000)
            logger.error("Request failed", extra={**context, "error": str(e)})
            raise

        context["duration_ms"] = int((time.perf_counter() - started) * 1000)
        logger.info("Request completed", extra={**context, "status_code": response.status_code})
        return response


def _error_body(request: Request, detail: str, debug_info: Optional[str] = None) -> dict:
    body = {
        "detail": detail,
        "correlation_id": _correlation_id(request),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if debug_info is not None:
        body["debug_info"] = debug_info
    return body


def status_code_for(exc: ApplicationException) -> int:
    for exception_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exception_type):
            return status_code
    return 500


async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    """Translate an ``ApplicationException`` into its HTTP error response."""
    status_code = status_code_for(exc)

    logger.warning(
        "Application error",
        extra={
            "correlation_id": _correlation_id(request),
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "error_message": exc.message,
            "status_code": status_code
        }
    )

    return JSONResponse(status_code=status_code, content=_error_body(request, exc.message))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500; the exception text is echoed only in development."""
    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": _correlation_id(request),
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    )

    debug_info = str(exc) if settings.environment == "development" else None
    return JSONResponse(
        status_code=500,
        content=_error_body(request, "Internal server error", debug_info)
    )
