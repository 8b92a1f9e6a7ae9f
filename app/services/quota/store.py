"""
Counter Stores
Key-value backends for the daily quota counters.

Two implementations behind one interface, chosen once at startup:
- RedisCounterStore: shared counters in Redis (GET / SET EX)
- NullCounterStore: nothing stored, every read is empty (rate limiting off)
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class CounterStore(ABC):
    """get / put-with-expiry over string values."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires ttl_seconds after this write."""

    async def close(self) -> None:
        return None


class NullCounterStore(CounterStore):
    """Always-permit store used when no Redis is configured."""

    async def get(self, key: str) -> Optional[str]:
        return None

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        return None


class RedisCounterStore(CounterStore):
    """Quota counters in Redis."""

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCounterStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        return await self._client.get(key)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._client.set(key, value, ex=ttl_seconds)

    async def close(self) -> None:
        await self._client.aclose()


def create_counter_store(redis_url: Optional[str]) -> CounterStore:
    """Pick the counter store for the configured Redis URL."""
    if not redis_url:
        logger.warning("⚠️  REDIS_URL not configured - rate limiting disabled")
        return NullCounterStore()

    logger.info(f"✅ Rate limit store: Redis ({redis_url[:20]}...)")
    return RedisCounterStore.from_url(redis_url)
