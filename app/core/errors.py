"""
Pipeline Errors
Every failure the decision pipeline can surface to a caller.

Each error maps to exactly one terminal response: an HTTP status and a
`{"error": ..., "message": ...}` body (message omitted when None).
"""
from typing import Optional, Dict, Any

from fastapi import Request
from fastapi.responses import JSONResponse


class DecisionProxyError(Exception):
    """Base class for errors rendered as a JSON error response."""

    status_code: int = 500
    error: str = "Internal server error"
    message: Optional[str] = None

    def __init__(self, error: Optional[str] = None, message: Optional[str] = None):
        if error is not None:
            self.error = error
        if message is not None:
            self.message = message
        super().__init__(self.error)

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return body


# ============================================================================
# INGRESS (4xx)
# ============================================================================

class MethodNotAllowedError(DecisionProxyError):
    status_code = 405
    error = "Method not allowed"


class RouteNotFoundError(DecisionProxyError):
    status_code = 404
    error = "Not found"


class InvalidAppHeaderError(DecisionProxyError):
    status_code = 401
    error = "Unauthorized: Invalid app header"


class MissingClientIdError(DecisionProxyError):
    status_code = 400
    error = "Missing X-CLIENT-ID header"


# ============================================================================
# QUOTA
# ============================================================================

class RateLimitExceededError(DecisionProxyError):
    status_code = 429
    error = "Rate limit exceeded"

    def __init__(self, limit: int):
        super().__init__(
            message=f"Maximum {limit} requests per day. Please try again tomorrow."
        )
        self.limit = limit


# ============================================================================
# PAYLOAD
# ============================================================================

class InvalidBodyError(DecisionProxyError):
    status_code = 400
    error = "Invalid JSON body"


class MissingFieldError(DecisionProxyError):
    status_code = 400

    def __init__(self, field: str):
        super().__init__(error=f"Missing required field: {field}")
        self.field = field


class InvalidFieldError(DecisionProxyError):
    status_code = 400
    error = "Invalid request body"


# ============================================================================
# SERVER / UPSTREAM
# ============================================================================

class ServerConfigurationError(DecisionProxyError):
    status_code = 500
    error = "Server configuration error"


class UpstreamUnavailableError(DecisionProxyError):
    status_code = 502
    error = "AI service unavailable"
    message = "Failed to get AI decision"


class EmptyCompletionError(DecisionProxyError):
    status_code = 502
    error = "Invalid AI response"
    message = "AI did not return a valid response"


class CompletionFormatError(DecisionProxyError):
    status_code = 502
    error = "Invalid AI response format"
    message = "AI returned invalid JSON"


class CompletionStructureError(DecisionProxyError):
    status_code = 502
    error = "Invalid AI response structure"
    message = "AI response does not match expected format"


def error_response(exc: DecisionProxyError) -> JSONResponse:
    """Render a pipeline error as its JSON response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def decision_proxy_error_handler(request: Request, exc: DecisionProxyError) -> JSONResponse:
    """FastAPI exception handler for DecisionProxyError."""
    return error_response(exc)
