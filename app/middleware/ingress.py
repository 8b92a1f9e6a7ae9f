"""
Ingress Middleware
Answers preflights and rejects wrong methods or paths before routing.

Order matters: OPTIONS on any path is a preflight, then any non-POST is 405
(even on unknown paths), then any path other than the served route is 404.
"""
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.api.v1.routes.decision import ROUTE_PATH
from app.core.errors import MethodNotAllowedError, RouteNotFoundError, error_response
from app.middleware.cors import get_preflight_headers

logger = logging.getLogger(__name__)


class IngressMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        settings = request.app.state.settings

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=get_preflight_headers(settings))

        if request.method != "POST":
            logger.debug(f"Rejected {request.method} {request.url.path}")
            return error_response(MethodNotAllowedError())

        if request.url.path != ROUTE_PATH:
            logger.debug(f"Rejected unknown path {request.url.path}")
            return error_response(RouteNotFoundError())

        return await call_next(request)
