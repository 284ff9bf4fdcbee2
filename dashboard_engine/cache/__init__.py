from dashboard_engine.cache.read_through import read_through
from dashboard_engine.cache.redis_cache import Cache, RedisTTLCache, connect_cache
from dashboard_engine.cache.ttl_cache import MemoryTTLCache
from dashboard_engine.cache.ttl_config import DEGRADED_TTL, TTL, ttl_for

__all__ = [
    "Cache",
    "DEGRADED_TTL",
    "MemoryTTLCache",
    "RedisTTLCache",
    "TTL",
    "connect_cache",
    "read_through",
    "ttl_for",
]
