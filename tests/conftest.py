"""
Shared fixtures: in-memory counter store, mocked OpenAI client, test app
"""
import json
from types import SimpleNamespace
from typing import Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.services.quota.store import CounterStore


VALID_DECISION = {
    "decision": "BUY",
    "confidence": 75,
    "reasoning": ["a", "b", "c"],
    "suggestion": "Go for it",
}

SHOES_REQUEST = {
    "item": "Shoes",
    "price": 80,
    "currency": "USD",
    "snapshot": {"balance": 500, "monthlyIncome": 3000, "daysLeftInMonth": 10},
}

APP_HEADERS = {"X-PEZO-APP": "pezo_v1", "X-CLIENT-ID": "client-123"}


class FakeCounterStore(CounterStore):
    """Dict-backed counter store that records every call."""

    def __init__(self, data: Optional[Dict[str, str]] = None, fail_get: bool = False, fail_put: bool = False):
        self.data = dict(data or {})
        self.fail_get = fail_get
        self.fail_put = fail_put
        self.gets: List[str] = []
        self.puts: List[Tuple[str, str, int]] = []

    async def get(self, key: str) -> Optional[str]:
        self.gets.append(key)
        if self.fail_get:
            raise ConnectionError("store unreachable")
        return self.data.get(key)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self.puts.append((key, value, ttl_seconds))
        if self.fail_put:
            raise ConnectionError("store unreachable")
        self.data[key] = value


def make_completion(content: Optional[str]) -> SimpleNamespace:
    """Shape of an openai ChatCompletion with a single choice."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def make_openai_client(content: Optional[str] = None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=make_completion(content if content is not None else json.dumps(VALID_DECISION)),
        side_effect=side_effect,
    )
    return client


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        environment="test",
        openai_api_key="sk-test",
        redis_url=None,
        sentry_dsn=None,
    )


@pytest.fixture
def store():
    return FakeCounterStore()


@pytest.fixture
def openai_client():
    return make_openai_client()


@pytest.fixture
def build_client(settings, store, openai_client):
    """Factory for a TestClient with overridable settings, store and upstream."""
    from main import create_app

    def _build(settings=settings, store=store, openai_client=openai_client):
        app = create_app(settings, counter_store=store, completion_client=openai_client)
        return TestClient(app)

    return _build


@pytest.fixture
def client(build_client):
    return build_client()


@pytest.fixture
def valid_decision():
    return dict(VALID_DECISION)


@pytest.fixture
def shoes_request():
    return json.loads(json.dumps(SHOES_REQUEST))


@pytest.fixture
def app_headers():
    return dict(APP_HEADERS)


@pytest.fixture
def completion_factory():
    """make_openai_client, for tests that need a specific upstream reply."""
    return make_openai_client


@pytest.fixture
def store_factory():
    return FakeCounterStore
