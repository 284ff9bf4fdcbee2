"""
Econ Dashboard — In-Memory TTL Cache
─────────────────────────────────────
Bounded LRU map of key → (payload, stored_at, ttl).

A read is fresh only while `now - stored_at < ttl`; stale entries read as
absent and are dropped. Once `maxsize` is reached the least recently used
entry is evicted.
"""

import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

log = logging.getLogger("ed.cache")


class MemoryTTLCache:
    backend = "memory"

    def __init__(self, maxsize: int = 1024, clock: Callable[[], float] = time.monotonic):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self._clock  = clock
        self._store: "OrderedDict[str, Tuple[Any, float, float]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store

    async def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        payload, stored_at, ttl = entry
        if self._clock() - stored_at >= ttl:
            del self._store[key]
            return None
        self._store.move_to_end(key)
        return payload

    async def set(self, key: str, payload: Any, ttl: float) -> None:
        if key in self._store:
            self._store.move_to_end(key)
        self._store[key] = (payload, self._clock(), ttl)
        while len(self._store) > self.maxsize:
            evicted, _ = self._store.popitem(last=False)
            log.debug(f"Evicted {evicted}")

    async def close(self) -> None:
        self._store.clear()
