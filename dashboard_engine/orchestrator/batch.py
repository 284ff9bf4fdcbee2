"""
Econ Dashboard — Batch Coordinator
───────────────────────────────────
Resolves one client request for many symbols/series:

  1. validate  : non-empty, deduplicated, at most `max_symbols`
  2. partition : fresh cache hits vs. misses
  3. fan out   : one upstream fetch per miss, at most `max_concurrency`
                 in flight, each bounded by `fetch_timeout`, no retry
  4. merge     : exactly one FetchResult per requested symbol

Fetches still running when `deadline` expires are cancelled and reported as
failures, so a hung upstream never holds the whole batch. Only successes are
cached, and they stay cached even when siblings fail.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from dashboard_engine.cache import Cache, ttl_for
from dashboard_engine.errors import UpstreamError, ValidationError
from dashboard_engine.network.mode import NetworkMode

log = logging.getLogger("ed.batch")

FetchFn    = Callable[[str], Awaitable[Any]]
FallbackFn = Callable[[str], Optional[dict]]


@dataclass
class FetchResult:
    symbol:   str
    success:  bool
    data:     Any = None
    error:    Optional[str] = None
    cached:   bool = False
    fallback: bool = False

    def to_wire(self) -> Any:
        return self.data if self.success else {"error": self.error}


def parse_symbols(raw: Iterable[str]) -> List[str]:
    """Trim, drop blanks and dedupe; the first occurrence wins."""
    seen, out = set(), []
    for s in raw:
        s = str(s).strip()
        if s and s not in seen:
            out.append(s)
            seen.add(s)
    return out


class BatchCoordinator:

    def __init__(
        self,
        name: str,
        fetch: FetchFn,
        cache: Cache,
        resource: str,
        mode: Optional[NetworkMode] = None,
        fallback: Optional[FallbackFn] = None,
        max_symbols: int = 50,
        max_concurrency: int = 10,
        fetch_timeout: float = 8.0,
        deadline: float = 20.0,
    ):
        self.name            = name
        self.fetch           = fetch
        self.cache           = cache
        self.resource        = resource
        self.mode            = mode or NetworkMode()
        self.fallback        = fallback
        self.max_symbols     = max_symbols
        self.max_concurrency = max_concurrency
        self.fetch_timeout   = fetch_timeout
        self.deadline        = deadline

    def cache_key(self, symbol: str) -> str:
        return f"{self.name}:{symbol}"

    def prepare(self, symbols: Iterable[str]) -> List[str]:
        request = parse_symbols(symbols)
        if not request:
            raise ValidationError("Symbols parameter is required")
        if len(request) > self.max_symbols:
            raise ValidationError(f"Maximum {self.max_symbols} symbols allowed per request")
        return request

    async def fetch_all(self, symbols: Iterable[str]) -> Dict[str, FetchResult]:
        request = self.prepare(symbols)

        results: Dict[str, FetchResult] = {}
        to_fetch: List[str] = []
        for symbol in request:
            cached = await self.cache.get(self.cache_key(symbol))
            if cached is not None:
                log.debug(f"[{self.name}] {symbol}: served from cache")
                results[symbol] = FetchResult(symbol, True, data=cached, cached=True)
            else:
                to_fetch.append(symbol)

        if to_fetch:
            log.info(f"[{self.name}] Fetching {len(to_fetch)}/{len(request)} symbols upstream")
            results.update(await self._fan_out(to_fetch))

        return {s: results[s] for s in request}

    async def _fan_out(self, symbols: List[str]) -> Dict[str, FetchResult]:
        sem   = asyncio.Semaphore(self.max_concurrency)
        tasks = {s: asyncio.create_task(self._fetch_one(s, sem)) for s in symbols}

        done, pending = await asyncio.wait(tasks.values(), timeout=self.deadline)
        if pending:
            log.warning(f"[{self.name}] Deadline {self.deadline:g}s hit, "
                        f"abandoning {len(pending)} fetches")
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        out: Dict[str, FetchResult] = {}
        for symbol, task in tasks.items():
            if task in done:
                out[symbol] = task.result()
            else:
                out[symbol] = self._failure(symbol, "Deadline exceeded")
        return out

    async def _fetch_one(self, symbol: str, sem: asyncio.Semaphore) -> FetchResult:
        async with sem:
            try:
                data = await asyncio.wait_for(self.fetch(symbol), timeout=self.fetch_timeout)
            except asyncio.TimeoutError:
                log.warning(f"[{self.name}] {symbol}: timed out")
                return self._failure(symbol, f"Timed out after {self.fetch_timeout:g}s")
            except UpstreamError as e:
                return self._failure(symbol, e.message)
            except Exception as e:
                log.warning(f"[{self.name}] {symbol}: {e}")
                return self._failure(symbol, str(e) or e.__class__.__name__)

        await self.cache.set(self.cache_key(symbol), data, ttl_for(self.resource, self.mode.degraded))
        return FetchResult(symbol, True, data=data)

    def _failure(self, symbol: str, error: str) -> FetchResult:
        if self.fallback and self.mode.should_use_fallback(self.name):
            ref = self.fallback(symbol)
            if ref is not None:
                log.info(f"[{self.name}] {symbol}: serving reference data ({error})")
                return FetchResult(symbol, True, data=ref, fallback=True)
        return FetchResult(symbol, False, error=error)
