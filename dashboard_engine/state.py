"""
Econ Dashboard — Application State
───────────────────────────────────
Everything a request needs, owned by the app instance rather than module
globals: the HTTP client, the cache, the network mode and one batch
coordinator per upstream. Tests build their own with fakes injected.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from dashboard_engine.cache import Cache, MemoryTTLCache
from dashboard_engine.config import Settings
from dashboard_engine.fetchers import FredFetcher, YahooFetcher, build_client
from dashboard_engine.network import NetworkMode, fallback_quote
from dashboard_engine.orchestrator import BatchCoordinator, CacheWarmer

log = logging.getLogger("ed.state")


@dataclass
class DashboardState:
    settings:    Settings
    client:      httpx.AsyncClient
    cache:       Cache
    mode:        NetworkMode
    yahoo:       YahooFetcher
    fred:        FredFetcher
    yahoo_batch: BatchCoordinator
    fred_batch:  BatchCoordinator
    warmer:      Optional[CacheWarmer] = None

    def use_cache(self, cache: Cache) -> None:
        self.cache = cache
        self.yahoo_batch.cache = cache
        self.fred_batch.cache = cache
        log.info(f"Cache backend: {getattr(cache, 'backend', type(cache).__name__)}")

    async def aclose(self) -> None:
        if self.warmer:
            self.warmer.stop()
        await self.client.aclose()
        await self.cache.close()


def build_state(
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[Cache] = None,
) -> DashboardState:
    client = client or build_client(timeout=settings.request_timeout)
    cache  = cache if cache is not None else MemoryTTLCache(maxsize=settings.cache_maxsize)
    mode   = NetworkMode(degraded=settings.degraded_mode, source="config")

    yahoo = YahooFetcher(client, chart_url=settings.yahoo_chart_url)
    fred  = FredFetcher(client, api_key=settings.fred_api_key, base_url=settings.fred_base_url)

    common = dict(
        cache           = cache,
        mode            = mode,
        max_symbols     = settings.max_batch_symbols,
        max_concurrency = settings.max_concurrency,
        fetch_timeout   = settings.request_timeout,
        deadline        = settings.batch_deadline,
    )
    yahoo_batch = BatchCoordinator("yahoo", yahoo.fetch_chart, resource="quote",
                                   fallback=fallback_quote, **common)
    fred_batch  = BatchCoordinator("fred", fred.observations, resource="fred_series", **common)

    warmer = None
    if settings.warm_cache:
        warmer = CacheWarmer.for_catalog(fred_batch, yahoo_batch, interval_s=settings.warm_interval)

    return DashboardState(
        settings    = settings,
        client      = client,
        cache       = cache,
        mode        = mode,
        yahoo       = yahoo,
        fred        = fred,
        yahoo_batch = yahoo_batch,
        fred_batch  = fred_batch,
        warmer      = warmer,
    )


def get_state(request: Request) -> DashboardState:
    return request.app.state.dashboard
