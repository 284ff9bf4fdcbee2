"""
Econ Dashboard — FRED Fetcher
──────────────────────────────
Federal Reserve Economic Data (api.stlouisfed.org).

Endpoints used:
  /series/observations   time series values (newest first)
  /series                series metadata (title, units, frequency)
  /releases/dates        release calendar
"""

import asyncio
import logging
from typing import Optional

import httpx

from dashboard_engine.errors import UpstreamError
from dashboard_engine.fetchers.http import get_json

log = logging.getLogger("ed.fetchers.fred")

DEFAULT_BASE_URL = "https://api.stlouisfed.org/fred"

RELEASE_DATE_PARAMS = (
    "realtime_start",
    "realtime_end",
    "limit",
    "sort_order",
    "include_release_dates_with_no_data",
)


class FredFetcher:

    def __init__(self, client: httpx.AsyncClient, api_key: str, base_url: str = DEFAULT_BASE_URL):
        self.client   = client
        self.api_key  = api_key
        self.base_url = base_url.rstrip("/")

    def _params(self, **extra) -> dict:
        if not self.api_key:
            raise UpstreamError("FRED API key is not configured")
        params = {"api_key": self.api_key, "file_type": "json"}
        params.update({k: v for k, v in extra.items() if v is not None and v != ""})
        return params

    async def _get(self, path: str, **params) -> dict:
        data = await get_json(self.client, f"{self.base_url}{path}", "FRED",
                              params=self._params(**params))
        if not isinstance(data, dict):
            raise UpstreamError(f"FRED returned an unexpected payload for {path}")
        return data

    async def observations(
        self,
        series_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> dict:
        return await self._get(
            "/series/observations",
            series_id=series_id,
            sort_order="desc",
            observation_start=start_date,
            observation_end=end_date,
            limit=limit,
        )

    async def series_info(self, series_id: str) -> dict:
        return await self._get("/series", series_id=series_id)

    async def release_dates(self, **params) -> dict:
        unknown = set(params) - set(RELEASE_DATE_PARAMS)
        if unknown:
            raise ValueError(f"Unsupported release date params: {sorted(unknown)}")
        return await self._get("/releases/dates", **params)

    async def release_summary(self, series_id: str) -> dict:
        """Series metadata plus the two latest observations (current / previous)."""
        info, obs = await asyncio.gather(
            self.series_info(series_id),
            self.observations(series_id, limit=2),
        )
        series = (info.get("seriess") or [{}])[0]
        observations = obs.get("observations") or []
        return {
            "seriesId":         series_id,
            "title":            series.get("title", ""),
            "lastUpdated":      series.get("last_updated", ""),
            "observationStart": series.get("observation_start", ""),
            "observationEnd":   series.get("observation_end", ""),
            "frequency":        series.get("frequency", ""),
            "units":            series.get("units", ""),
            "current":          observations[0] if len(observations) > 0 else None,
            "previous":         observations[1] if len(observations) > 1 else None,
        }
