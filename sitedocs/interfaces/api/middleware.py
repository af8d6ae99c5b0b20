"""
API Middleware - Request/response processing.

Provides:
- Request ID propagation and latency logging
- Error handling with taxonomy codes
- Per-client rate limiting
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from sitedocs.config.errors import ErrorCode, SiteDocsError

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.SEARCH_CANCELLED: 409,
    ErrorCode.SECURITY_RATE_LIMITED: 429,
    ErrorCode.STORAGE_CONNECTION_FAILED: 503,
    ErrorCode.STORAGE_READ_FAILED: 503,
    ErrorCode.STORAGE_WRITE_FAILED: 503,
}


def error_status(code: ErrorCode) -> int:
    """HTTP status for an error code; unknown codes are server errors."""
    return _STATUS_BY_CODE.get(code, 500)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def _error_body(request: Request, code: ErrorCode, message: str, details: dict) -> dict:
    return {
        "error": {"code": code.value, "message": message, "details": details},
        "request_id": _request_id(request),
    }


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request ID and log method, path, status and latency."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        logger.info(
            "%s %s status=%d latency_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert SiteDocsError exceptions to structured JSON responses."""

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        try:
            return await call_next(request)
        except SiteDocsError as e:
            logger.warning(
                "%s: %s request_id=%s details=%s",
                e.code.value,
                e.message,
                _request_id(request),
                e.details,
            )
            return JSONResponse(
                status_code=error_status(e.code),
                content={"error": e.to_dict(), "request_id": _request_id(request)},
            )
        except Exception as e:
            logger.exception("Unhandled error: %s request_id=%s", e, _request_id(request))
            return JSONResponse(
                status_code=500,
                content=_error_body(
                    request, ErrorCode.INTERNAL_ERROR, "Internal server error", {}
                ),
            )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed one-minute window rate limiting per client IP."""

    EXEMPT_PATHS = frozenset({"/health"})

    def __init__(self, app: ASGIApp, requests_per_minute: int = 120) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self._windows: dict[str, tuple[int, int]] = {}

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        window = int(time.time() // 60)

        current_window, used = self._windows.get(client_ip, (window, 0))
        if current_window != window:
            used = 0

        if used >= self.requests_per_minute:
            logger.warning(
                "Rate limit exceeded for %s request_id=%s", client_ip, _request_id(request)
            )
            return JSONResponse(
                status_code=429,
                content=_error_body(
                    request,
                    ErrorCode.SECURITY_RATE_LIMITED,
                    "Too many requests. Please retry after 60 seconds.",
                    {"retry_after": 60},
                ),
                headers={"Retry-After": "60"},
            )

        self._windows[client_ip] = (window, used + 1)

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(self.requests_per_minute - used - 1)
        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        return response
