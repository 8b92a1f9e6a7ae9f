"""
Dependency Injection
Builds the long-lived clients and the decision pipeline, and hands them to
routes via FastAPI dependencies.

Everything lives on app.state rather than in module globals, so each app
instance (and each test) gets its own settings, counter store and
completion client.
"""
from typing import Optional
import logging

from fastapi import FastAPI, Request
from openai import AsyncOpenAI

from app.core.config import Settings
from app.services.decision.advisor import DecisionAdvisor, create_completion_client
from app.services.decision.pipeline import DecisionPipeline
from app.services.quota.gate import QuotaGate
from app.services.quota.store import CounterStore, create_counter_store

logger = logging.getLogger(__name__)


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================

def get_settings(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_pipeline(request: Request) -> DecisionPipeline:
    """Decision pipeline for this app."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise RuntimeError("Decision pipeline not initialized")
    return pipeline


# ============================================================================
# STARTUP/SHUTDOWN
# ============================================================================

def initialize_clients(
    app: FastAPI,
    settings: Settings,
    counter_store: Optional[CounterStore] = None,
    completion_client: Optional[AsyncOpenAI] = None,
) -> None:
    """
    Attach settings, clients and the pipeline to the app.

    Clients passed in are used as-is and left open at shutdown; clients
    built here from settings are closed by shutdown_clients().
    """
    owned = []

    if counter_store is None:
        counter_store = create_counter_store(settings.redis_url)
        owned.append(counter_store)

    if completion_client is None:
        completion_client = create_completion_client(settings)
        if completion_client is not None:
            owned.append(completion_client)

    quota_gate = QuotaGate(
        counter_store,
        limit=settings.daily_request_limit,
        ttl_seconds=settings.rate_limit_ttl_seconds,
    )
    advisor = (
        DecisionAdvisor.from_settings(completion_client, settings)
        if completion_client is not None
        else None
    )

    app.state.settings = settings
    app.state.pipeline = DecisionPipeline(quota_gate, advisor)
    app.state.owned_clients = owned


async def shutdown_clients(app: FastAPI) -> None:
    """Close the clients this app opened."""
    for client in getattr(app.state, "owned_clients", []):
        try:
            await client.close()
            logger.info(f"✅ {type(client).__name__} closed")
        except Exception as e:
            logger.warning(f"⚠️  Failed to close {type(client).__name__}: {e}")
    app.state.owned_clients = []
