import logging
from typing import Any, Awaitable, Callable

from dashboard_engine.cache.redis_cache import Cache

log = logging.getLogger("ed.cache")


async def read_through(cache: Cache, key: str, ttl: float,
                       fetch: Callable[[], Awaitable[Any]]) -> Any:
    """Fresh cached payload, or fetch + store. Failures propagate and are not cached."""
    cached = await cache.get(key)
    if cached is not None:
        log.debug(f"{key}: served from cache")
        return cached
    data = await fetch()
    await cache.set(key, data, ttl)
    return data
