"""
Request Logging Middleware
One log line per request: method, path, status, duration
"""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        client_id = request.headers.get("X-CLIENT-ID", "-")
        if len(client_id) > 8:
            client_id = f"{client_id[:8]}..."

        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({duration_ms:.0f}ms, client={client_id})"
        )
        return response
