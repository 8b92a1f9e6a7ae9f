"""
Unit tests for the daily quota gate

Ensures:
1. Keys are per client and per UTC day
2. The limit rejects without writing
3. Admitted requests write count + 1 with the TTL
4. Store failures never block a request (fail-open)
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import RateLimitExceededError
from app.services.quota.gate import QuotaGate, parse_count, quota_key
from app.services.quota.store import NullCounterStore, create_counter_store, RedisCounterStore


NOW = datetime(2026, 3, 14, 23, 30, tzinfo=timezone.utc)
KEY = "rate_limit:client-123:2026-03-14"


def _gate(store, limit=3):
    return QuotaGate(store, limit=limit, ttl_seconds=86400, clock=lambda: NOW)


def test_quota_key_uses_utc_day():
    assert quota_key("client-123", NOW) == KEY

    # 23:30 UTC is already the next day in UTC+2, but the key stays on UTC
    local = NOW.astimezone(timezone(timedelta(hours=2)))
    assert quota_key("client-123", local) == KEY

    assert quota_key("client-123", NOW + timedelta(hours=1)) == "rate_limit:client-123:2026-03-15"


@pytest.mark.parametrize("raw,expected", [
    (None, 0),
    ("0", 0),
    ("2", 2),
    ("-4", 0),
    ("garbage", 0),
])
def test_parse_count(raw, expected):
    assert parse_count(raw) == expected


@pytest.mark.asyncio
async def test_first_request_of_the_day(store_factory):
    store = store_factory()

    count = await _gate(store).check_and_increment("client-123")

    assert count == 1
    assert store.gets == [KEY]
    assert store.puts == [(KEY, "1", 86400)]


@pytest.mark.asyncio
async def test_last_allowed_request(store_factory):
    store = store_factory({KEY: "2"})

    assert await _gate(store).check_and_increment("client-123") == 3
    assert store.data[KEY] == "3"


@pytest.mark.asyncio
async def test_limit_reached_rejects_without_write(store_factory):
    store = store_factory({KEY: "3"})

    with pytest.raises(RateLimitExceededError) as exc_info:
        await _gate(store).check_and_increment("client-123")

    assert exc_info.value.status_code == 429
    assert exc_info.value.to_dict() == {
        "error": "Rate limit exceeded",
        "message": "Maximum 3 requests per day. Please try again tomorrow.",
    }
    assert store.puts == []
    assert store.data[KEY] == "3"


@pytest.mark.asyncio
async def test_other_clients_are_independent(store_factory):
    store = store_factory({KEY: "3"})

    assert await _gate(store).check_and_increment("client-456") == 1


@pytest.mark.asyncio
async def test_read_failure_fails_open(store_factory):
    store = store_factory({KEY: "99"}, fail_get=True)

    assert await _gate(store).check_and_increment("client-123") is None
    assert store.puts == []


@pytest.mark.asyncio
async def test_write_failure_does_not_block(store_factory):
    store = store_factory({KEY: "1"}, fail_put=True)

    assert await _gate(store).check_and_increment("client-123") == 2
    assert store.data[KEY] == "1"


@pytest.mark.asyncio
async def test_null_store_always_permits():
    gate = _gate(NullCounterStore(), limit=1)

    for _ in range(5):
        assert await gate.check_and_increment("client-123") == 1


def test_store_selection():
    assert isinstance(create_counter_store(None), NullCounterStore)
    assert isinstance(create_counter_store(""), NullCounterStore)
    assert isinstance(create_counter_store("redis://localhost:6379/0"), RedisCounterStore)
