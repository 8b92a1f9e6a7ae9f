"""
CORS Configuration
Cross-Origin Resource Sharing headers for the mobile/web client

The endpoint is called from an app, not a credentialed browser session, so
any origin is allowed. Preflight answers are built by hand (always 204 with
an empty body), which Starlette's CORSMiddleware does not do.
"""
from typing import Dict

from app.core.config import Settings

ALLOWED_METHODS = ["POST", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "X-PEZO-APP", "X-CLIENT-ID"]


def get_preflight_headers(settings: Settings) -> Dict[str, str]:
    """Headers for an OPTIONS preflight response."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
        "Access-Control-Max-Age": str(settings.cors_max_age),
    }


def get_cors_headers() -> Dict[str, str]:
    """Headers attached to successful decision responses."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    }
