"""
Econ Dashboard — Redis TTL Cache
─────────────────────────────────
Same contract as MemoryTTLCache, backed by Redis SETEX so several workers
share one cache. Redis trouble never fails a request: reads degrade to a
miss and writes are skipped.
"""

import json
import logging
from typing import Any, Optional, Union

import redis.asyncio as aioredis

from dashboard_engine.cache.ttl_cache import MemoryTTLCache

log = logging.getLogger("ed.cache")

Cache = Union[MemoryTTLCache, "RedisTTLCache"]


class RedisTTLCache:
    backend = "redis"

    def __init__(self, client: aioredis.Redis, prefix: str = "ed:"):
        self._client = client
        self._prefix = prefix

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self._client.get(self._prefix + key)
        except Exception as e:
            log.warning(f"Redis read failed for {key}: {e}")
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            log.warning(f"Discarding unreadable cache entry {key}")
            return None

    async def set(self, key: str, payload: Any, ttl: float) -> None:
        try:
            await self._client.setex(self._prefix + key, max(1, int(ttl)), json.dumps(payload))
        except Exception as e:
            log.warning(f"Redis write failed for {key}: {e}")

    async def close(self) -> None:
        await self._client.aclose()


async def connect_cache(redis_url: str, maxsize: int = 1024) -> Cache:
    """Redis when configured and reachable, otherwise the in-process LRU."""
    if redis_url:
        try:
            client = aioredis.from_url(redis_url, decode_responses=True, socket_timeout=2)
            await client.ping()
            log.info("Redis connected")
            return RedisTTLCache(client)
        except Exception as e:
            log.warning(f"Redis unavailable ({e}) - using in-memory cache")
    return MemoryTTLCache(maxsize=maxsize)
