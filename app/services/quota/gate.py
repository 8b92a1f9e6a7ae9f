"""
Quota Gate
Per-client daily request ceiling.

The counter is read, checked and then written back as two separate store
operations. Concurrent requests from one client can read the same count and
both pass, so the ceiling may be exceeded under contention.

Fail-open: if the store cannot be read, the request proceeds unmetered.
A failed write after a passing read is logged and ignored.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from app.core.errors import RateLimitExceededError
from app.services.quota.store import CounterStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "rate_limit"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def quota_key(client_id: str, now: datetime) -> str:
    """rate_limit:{client_id}:{YYYY-MM-DD} for the UTC day of `now`."""
    day = now.astimezone(timezone.utc).strftime("%Y-%m-%d")
    return f"{KEY_PREFIX}:{client_id}:{day}"


def parse_count(raw: Optional[str]) -> int:
    """Stored count as a non-negative int; absent or garbage counts as 0."""
    if raw is None:
        return 0
    try:
        count = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unreadable quota value: {raw!r}")
        return 0
    return max(count, 0)


def _short(client_id: str) -> str:
    return f"{client_id[:8]}..." if len(client_id) > 8 else client_id


class QuotaGate:
    """
    Usage:
        gate = QuotaGate(store, limit=3)
        await gate.check_and_increment(client_id)  # raises RateLimitExceededError
    """

    def __init__(
        self,
        store: CounterStore,
        limit: int = 3,
        ttl_seconds: int = 86400,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.limit = limit
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    async def check_and_increment(self, client_id: str) -> Optional[int]:
        """
        Admit or reject one request for today.

        Returns:
            The new count for today, or None when the store was unavailable

        Raises:
            RateLimitExceededError: The client already used today's quota
        """
        key = quota_key(client_id, self.clock())

        try:
            count = parse_count(await self.store.get(key))
        except Exception as e:
            logger.warning(f"⚠️  Rate limit store unavailable, skipping quota check: {e}")
            return None

        if count >= self.limit:
            logger.info(f"🚫 Rate limit hit for client {_short(client_id)} ({count}/{self.limit})")
            raise RateLimitExceededError(self.limit)

        new_count = count + 1
        try:
            await self.store.put(key, str(new_count), self.ttl_seconds)
        except Exception as e:
            logger.warning(f"⚠️  Could not update rate limit counter: {e}")

        return new_count
