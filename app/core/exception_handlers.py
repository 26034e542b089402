"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error body has the
same shape: {"error": <code>, "message": <text>, "details"?: ...}.

Search failures reach the API as MeetMeException subclasses; their
error_code picks the status (timeouts 504, unavailable sources 503, bad
filters 400).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import MeetMeException
from app.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status; unknown codes are client errors (400).
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 503,
    "SEARCH_FAILED": 503,
    "SUGGESTIONS_FAILED": 503,
    "SEARCH_CANCELLED": 503,
    "SEARCH_TIMEOUT": 504,
}


def status_for(error_code: str) -> int:
    """HTTP status for a domain error code."""
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _meetme_exception_handler(
    request: Request, exc: MeetMeException
) -> JSONResponse:
    """Return MeetMeException.to_dict(); server-side failures are logged with the route."""
    status = status_for(exc.error_code)
    if status >= 500:
        logger.warning(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.error_code,
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 for query parameters that fail declared constraints (length, range)."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 when a client exceeds the search or suggestion rate limit."""
    logger.info("Rate limit exceeded on %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=429,
        content={"error": "RATE_LIMITED", "message": f"Rate limit exceeded: {exc.detail}"},
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (unknown routes, wrong method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; detail only when debug is on, trace_id whenever a span is active."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    content: dict[str, Any] = {
        "error": "INTERNAL_ERROR",
        "message": str(exc) if settings.debug else "Internal server error",
    }
    trace_id = get_trace_id()
    if trace_id:
        content["trace_id"] = trace_id
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: MeetMeException (and
    subclasses), RequestValidationError, RateLimitExceeded,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(MeetMeException, _meetme_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
