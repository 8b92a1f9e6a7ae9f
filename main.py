"""
Pezo "Should I Buy It?" Decision Proxy
======================================
FastAPI service sitting between the Pezo app and OpenAI:
- App identity + client id header checks
- Per-client daily quota (Redis, fail-open)
- Prompt construction from the user's financial snapshot
- Upstream call and decision validation

Architecture:
- app/core/: Configuration, dependencies, security, errors
- app/middleware/: Ingress filtering, error handling, logging, CORS
- app/models/: Pydantic schemas
- app/services/: Quota gate and decision pipeline
- app/api/v1/routes/: The decision endpoint
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from openai import AsyncOpenAI

from app.core.config import Settings, settings as default_settings
from app.core.dependencies import initialize_clients, shutdown_clients
from app.core.errors import DecisionProxyError, decision_proxy_error_handler
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.middleware.ingress import IngressMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.api.v1.routes import decision_router
from app.services.quota.store import CounterStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.INFO if settings.environment == "production" else logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# ============================================================================
# SENTRY ERROR TRACKING
# ============================================================================

def configure_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        logger.info("ℹ️  Sentry not configured (SENTRY_DSN not set)")
        return

    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
            integrations=[
                FastApiIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
            ]
        )
        logger.info("✅ Sentry error tracking initialized")
    except Exception as e:
        logger.warning(f"⚠️  Failed to initialize Sentry: {e}")


# ============================================================================
# LIFECYCLE MANAGEMENT
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    settings = app.state.settings

    logger.info("=" * 80)
    logger.info("Starting Pezo Decision Proxy")
    logger.info("=" * 80)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Port: {settings.port}")
    logger.info(f"Model: {settings.openai_model}")
    logger.info(f"Daily limit: {settings.daily_request_limit} requests/client")

    yield

    logger.info("Shutting down application...")
    await shutdown_clients(app)
    logger.info("✅ Application shutdown complete")


# ============================================================================
# APP INITIALIZATION
# ============================================================================

def create_app(
    settings: Optional[Settings] = None,
    counter_store: Optional[CounterStore] = None,
    completion_client: Optional[AsyncOpenAI] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (defaults to environment settings)
        counter_store: Quota store override (defaults to Redis / no-op from settings)
        completion_client: OpenAI client override (defaults to one built from settings)
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Pezo Decision Proxy",
        description="Should I buy it? Purchase decisions from the user's financial snapshot",
        version="1.0.0",
        docs_url=None,  # Only POST /should-i-buy is routable
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    initialize_clients(app, settings, counter_store=counter_store, completion_client=completion_client)

    app.add_exception_handler(DecisionProxyError, decision_proxy_error_handler)

    # Ingress filter (method / path / preflight) runs closest to the routes
    app.add_middleware(IngressMiddleware)

    # Request logging
    app.add_middleware(RequestLoggingMiddleware)

    # Global error handler (must be last)
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(decision_router)

    return app


configure_logging(default_settings)
configure_sentry(default_settings)

app = create_app()


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=default_settings.port,
        reload=default_settings.debug,
        log_level="info"
    )
