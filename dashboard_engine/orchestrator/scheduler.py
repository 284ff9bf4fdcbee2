"""
Econ Dashboard — Cache Warmer
──────────────────────────────
Economic data changes at most a few times a day, so one interval job walks
the dashboard catalog through the batch coordinators and leaves the cache
warm for the next page load. Disabled unless WARM_CACHE is set.
"""

import logging
import time
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from dashboard_engine.catalog import all_fred_series, all_yahoo_tickers
from dashboard_engine.orchestrator.batch import BatchCoordinator, parse_symbols

log = logging.getLogger("ed.scheduler")

GRACE_S = 300   # 5-minute misfire grace window


def _chunks(seq: List[str], size: int):
    for i in range(0, len(seq), size):
        yield seq[i:i + size]


class CacheWarmer:

    def __init__(self, coordinators: List[BatchCoordinator], symbol_lists: List[List[str]],
                 interval_s: int = 3600):
        self.jobs       = list(zip(coordinators, symbol_lists))
        self.interval_s = interval_s
        self._scheduler: Optional[AsyncIOScheduler] = None
        self.last_run: Optional[dict] = None

    @classmethod
    def for_catalog(cls, fred: BatchCoordinator, yahoo: BatchCoordinator,
                    interval_s: int = 3600) -> "CacheWarmer":
        return cls([fred, yahoo],
                   [parse_symbols(all_fred_series()), parse_symbols(all_yahoo_tickers())],
                   interval_s)

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def warm(self) -> dict:
        t0 = time.monotonic()
        ok = err = 0
        for coordinator, symbols in self.jobs:
            for batch in _chunks(symbols, coordinator.max_symbols):
                try:
                    results = await coordinator.fetch_all(batch)
                except Exception as e:
                    log.error(f"[warm:{coordinator.name}] batch failed: {e}")
                    err += len(batch)
                    continue
                for r in results.values():
                    if r.success:
                        ok += 1
                    else:
                        err += 1
        elapsed = round(time.monotonic() - t0, 1)
        log.info(f"[warm] Done — {ok} ok  {err} errors  {elapsed}s")
        self.last_run = {"ok": ok, "errors": err, "duration_s": elapsed,
                         "finished_at": int(time.time())}
        return self.last_run

    def start(self) -> None:
        if self.running:
            log.warning("Cache warmer already running — ignoring start call")
            return
        self._scheduler = AsyncIOScheduler(timezone="UTC")
        self._scheduler.add_job(
            self.warm,
            "interval",
            seconds            = self.interval_s,
            id                 = "cache_warm",
            name               = f"Warm dashboard catalog every {self.interval_s}s",
            max_instances      = 1,
            misfire_grace_time = GRACE_S,
            replace_existing   = True,
        )
        self._scheduler.start()
        log.info(f"Cache warmer live — every {self.interval_s}s")

    def stop(self) -> None:
        if self.running:
            self._scheduler.shutdown(wait=False)
            log.info("Cache warmer stopped")
        self._scheduler = None

    def status(self) -> dict:
        if not self.running:
            return {"running": False, "jobs": [], "last_run": self.last_run}
        jobs = []
        for job in self._scheduler.get_jobs():
            nxt = job.next_run_time
            jobs.append({
                "id":       job.id,
                "name":     job.name,
                "next_run": nxt.isoformat() if nxt else None,
            })
        return {"running": True, "jobs": jobs, "last_run": self.last_run}
