"""Middleware for error handling, logging, and request context."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from voiceforge.core.exceptions import InvalidAudioSample, VoiceForgeError
from voiceforge.utils.logging import bind_request_id, reset_request_id

logger = logging.getLogger(__name__)

# Error code -> HTTP status
ERROR_STATUS: dict[str, int] = {
    "MALFORMED_PAYLOAD": 400,
    "INVALID_PARAMETER": 422,
    "INVALID_AUDIO": 422,
    "UNKNOWN_VOICE": 404,
    "DUPLICATE_VOICE": 409,
    "SYNTHESIS_FAILED": 502,
    "TRAINING_FAILED": 502,
    "ENGINE_UNAVAILABLE": 503,
}

ENGINE_RETRY_AFTER = 30


# ============================================================================
# Request ID Middleware
# ============================================================================

class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add X-Request-ID header to all requests/responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        token = bind_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers["X-Request-ID"] = request_id
        return response


# ============================================================================
# Logging Middleware
# ============================================================================

class LoggingMiddleware(BaseHTTPMiddleware):
    """Log all requests with timing information."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status_code = response.status_code
        log_msg = (
            f"{request.method} {request.url.path} - {status_code} - {duration_ms:.1f}ms "
            f"from {client_ip}"
        )

        if status_code >= 500:
            logger.error(log_msg)
        elif status_code >= 400:
            logger.warning(log_msg)
        else:
            logger.info(log_msg)

        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.1f}"
        return response


# ============================================================================
# Body Size Middleware
# ============================================================================

class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds the limit."""

    def __init__(self, app, max_bytes: int) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > self.max_bytes:
            max_mb = self.max_bytes / (1024 * 1024)
            return create_error_response(
                status_code=413,
                error=f"Request body too large (max {max_mb:.0f}MB)",
                code="BODY_TOO_LARGE",
                request_id=getattr(request.state, "request_id", None),
                details={"max_bytes": self.max_bytes},
            )
        return await call_next(request)


# ============================================================================
# Error Responses
# ============================================================================

def create_error_response(
    status_code: int,
    error: str,
    code: str,
    request_id: str | None = None,
    details: dict | None = None,
    retry_after: int | None = None,
) -> JSONResponse:
    """Create consistent error response."""
    content: dict[str, Any] = {
        "error": error,
        "code": code,
        "status": status_code,
    }

    if request_id:
        content["request_id"] = request_id
    if details:
        content["details"] = details
    if retry_after:
        content["retry_after"] = retry_after

    headers = {}
    if retry_after:
        headers["Retry-After"] = str(retry_after)

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers if headers else None,
    )


def _error_details(exc: VoiceForgeError) -> dict[str, Any]:
    details = {}
    for key, value in vars(exc).items():
        if key in ("message", "recoverable") or value is None:
            continue
        details[key] = value if isinstance(value, (str, int, bool)) else str(value)
    return details


def error_response_for(request: Request, exc: VoiceForgeError) -> JSONResponse:
    """Map a domain error to its HTTP response."""
    status_code = ERROR_STATUS.get(exc.code, 500)
    if isinstance(exc, InvalidAudioSample) and exc.reason == "too_large":
        status_code = 413

    retry_after = ENGINE_RETRY_AFTER if exc.code == "ENGINE_UNAVAILABLE" else None
    if status_code >= 500:
        logger.error(f"{exc.code}: {exc}")

    return create_error_response(
        status_code=status_code,
        error=exc.message,
        code=exc.code,
        request_id=getattr(request.state, "request_id", None),
        details=_error_details(exc),
        retry_after=retry_after,
    )


async def voiceforge_error_handler(request: Request, exc: VoiceForgeError) -> JSONResponse:
    """Handle domain errors raised outside the gateways (e.g. payload decoding)."""
    return error_response_for(request, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle malformed request bodies."""
    return create_error_response(
        status_code=422,
        error="Invalid request body",
        code="INVALID_REQUEST",
        request_id=getattr(request.state, "request_id", None),
        details={"errors": [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception(f"Unhandled exception: {exc}")

    return create_error_response(
        status_code=500,
        error="Internal server error",
        code="INTERNAL_ERROR",
        request_id=request_id,
    )


# ============================================================================
# Setup Function
# ============================================================================

def setup_middleware(app: FastAPI, max_body_bytes: int | None = None) -> None:
    """Add all middleware to the app.

    Middleware runs in reverse order of addition: the request id is set
    before the access log reads it.
    """
    app.add_exception_handler(VoiceForgeError, voiceforge_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    if max_body_bytes:
        app.add_middleware(BodySizeLimitMiddleware, max_bytes=max_body_bytes)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
