"""
Daily request quota
"""
from app.services.quota.gate import QuotaGate, quota_key
from app.services.quota.store import (
    CounterStore,
    NullCounterStore,
    RedisCounterStore,
    create_counter_store,
)

__all__ = [
    "QuotaGate",
    "quota_key",
    "CounterStore",
    "NullCounterStore",
    "RedisCounterStore",
    "create_counter_store",
]
