"""Request logging middleware"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
import structlog

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and tag every log line of it with a request id"""

    # High-frequency probes
    EXCLUDE_PATHS = ("/health",)

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.exception("Request failed", duration_ms=round(duration_ms, 2))
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if not request.url.path.startswith(self.EXCLUDE_PATHS):
            log = logger.warning if response.status_code >= 500 else logger.info
            log("Request completed", status=response.status_code, duration_ms=round(duration_ms, 2))

        response.headers["X-Request-ID"] = request_id
        return response
