"""
Econ Dashboard — Proxy Endpoints
─────────────────────────────────
/api/yahoo-batch  /api/fred-batch      many symbols → {symbol: data | {error}}
/api/yahoo        /api/fred            single resource passthrough
/api/yahoo-history /api/quotes         server-side shaping of Yahoo charts
/api/fred-release /api/fred-releases-dates /api/fred-chart
/api/economic-calendar /api/economic-insights
/api/network-mode /api/cache-warmer    operator surface

Validation problems are 400s raised before any upstream call. An upstream
failure on a single-resource route is a 500 carrying the upstream message;
inside a batch it is just that symbol's {error}.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from dashboard_engine.cache import read_through, ttl_for
from dashboard_engine.charts import (
    AXIS_TYPES,
    DATE_FORMATS,
    VALUE_TYPES,
    build_chart_series,
    calculate_period_returns,
    format_period_change,
)
from dashboard_engine.econ_calendar import build_calendar
from dashboard_engine.errors import DashboardError, InternalError, UpstreamError, ValidationError
from dashboard_engine.fetchers import parse_history, quote_summary
from dashboard_engine.insights import INSIGHT_SERIES, build_insights, reading_from_observations
from dashboard_engine.orchestrator import BatchCoordinator
from dashboard_engine.state import DashboardState, get_state

log = logging.getLogger("ed.api")

router = APIRouter(prefix="/api")


# ── helpers ──────────────────────────────────────────────────

def _split_symbols(raw: Optional[str]) -> List[str]:
    if not raw or not raw.strip():
        raise ValidationError("Symbols parameter is required")
    return raw.split(",")


async def _body_symbols(request: Request) -> List[str]:
    try:
        body = await request.json()
    except ValueError:
        body = None
    symbols = body.get("symbols") if isinstance(body, dict) else None
    if not isinstance(symbols, list):
        raise ValidationError("Symbols array is required in request body")
    if not all(isinstance(s, str) for s in symbols):
        raise ValidationError("Symbols array must contain only strings")
    return symbols


async def _guard(label: str, work: Callable[[], Awaitable[Any]]) -> Any:
    """Run a route body; anything that is not already a DashboardError becomes a 500."""
    try:
        return await work()
    except UpstreamError as e:
        raise InternalError(f"Failed to fetch {label}", details=e.message)
    except DashboardError:
        raise
    except Exception as e:
        log.error(f"{label}: {e}")
        raise InternalError(f"Failed to fetch {label}", details=str(e))


async def _run_batch(coordinator: BatchCoordinator, symbols: List[str], label: str) -> Dict[str, Any]:
    async def work():
        results = await coordinator.fetch_all(symbols)
        return {s: r.to_wire() for s, r in results.items()}
    return await _guard(label, work)


def _require(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


async def _yahoo_chart(state: DashboardState, symbol: str,
                       range_: Optional[str], interval: Optional[str]) -> dict:
    # Plain chart requests share cache entries with the batch route.
    if range_ or interval:
        key = f"yahoo:{symbol}:{range_ or ''}:{interval or ''}"
    else:
        key = state.yahoo_batch.cache_key(symbol)
    return await read_through(
        state.cache, key, ttl_for("quote", state.mode.degraded),
        lambda: state.yahoo.fetch_chart(symbol, range_, interval),
    )


async def _fred_observations(state: DashboardState, series: str,
                             start_date: Optional[str], end_date: Optional[str]) -> dict:
    key = f"fred_series:{series}_{start_date or 'no-start'}_{end_date or 'no-end'}"
    return await read_through(
        state.cache, key, ttl_for("fred_series", state.mode.degraded),
        lambda: state.fred.observations(series, start_date, end_date),
    )


# ── batch ────────────────────────────────────────────────────

@router.get("/yahoo-batch", tags=["Yahoo"])
async def yahoo_batch_get(
    symbols: Optional[str] = Query(None, description="Comma-separated symbols e.g. SPY,QQQ,^VIX"),
    state: DashboardState = Depends(get_state),
):
    return await _run_batch(state.yahoo_batch, _split_symbols(symbols), "Yahoo Finance data")


@router.post("/yahoo-batch", tags=["Yahoo"])
async def yahoo_batch_post(request: Request, state: DashboardState = Depends(get_state)):
    return await _run_batch(state.yahoo_batch, await _body_symbols(request), "Yahoo Finance data")


@router.get("/fred-batch", tags=["FRED"])
async def fred_batch_get(
    symbols: Optional[str] = Query(None, description="Comma-separated FRED series IDs e.g. UNRATE,DGS10"),
    state: DashboardState = Depends(get_state),
):
    return await _run_batch(state.fred_batch, _split_symbols(symbols), "FRED data")


@router.post("/fred-batch", tags=["FRED"])
async def fred_batch_post(request: Request, state: DashboardState = Depends(get_state)):
    return await _run_batch(state.fred_batch, await _body_symbols(request), "FRED data")


# ── Yahoo single ─────────────────────────────────────────────

@router.get("/yahoo", tags=["Yahoo"])
async def yahoo_single(
    symbol: Optional[str] = None,
    range: Optional[str] = None,
    interval: Optional[str] = None,
    state: DashboardState = Depends(get_state),
):
    symbol = _require(symbol, "Symbol is required")
    return await _guard("Yahoo Finance data",
                        lambda: _yahoo_chart(state, symbol, range, interval))


@router.get("/yahoo-history", tags=["Yahoo"])
async def yahoo_history(
    symbol: Optional[str] = None,
    range: str = "1y",
    interval: str = "1d",
    state: DashboardState = Depends(get_state),
):
    symbol = _require(symbol, "Symbol is required")

    async def work():
        chart   = await _yahoo_chart(state, symbol, range, interval)
        history = parse_history(symbol, chart)
        returns = calculate_period_returns(history["prices"], history["dates"])
        history.update({
            "symbol":            symbol,
            "range":             range,
            "interval":          interval,
            "returns":           returns,
            "returns_formatted": {k: format_period_change(v, "markets") for k, v in returns.items()},
        })
        return history

    return await _guard("Yahoo Finance history", work)


@router.get("/quotes", tags=["Yahoo"])
async def quotes(
    symbols: Optional[str] = Query(None, description="Comma-separated symbols e.g. AAPL,TSLA,MSFT"),
    state: DashboardState = Depends(get_state),
):
    async def work():
        results = await state.yahoo_batch.fetch_all(_split_symbols(symbols))
        data = {}
        for sym, r in results.items():
            if r.success and r.fallback:
                data[sym] = r.data
                continue
            summary = quote_summary(sym, r.data) if r.success else None
            if summary:
                summary["cached"] = r.cached
                data[sym] = summary
            else:
                data[sym] = {
                    "symbol":    sym,
                    "price":     None,
                    "error":     r.error or "Price temporarily unavailable",
                    "timestamp": int(time.time()),
                    "source":    "unavailable",
                }
        return {
            "symbols":   list(results),
            "count":     len(data),
            "timestamp": int(time.time()),
            "data":      data,
        }

    return await _guard("Yahoo Finance quotes", work)


# ── FRED single ──────────────────────────────────────────────

@router.get("/fred", tags=["FRED"])
async def fred_series(
    series: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    state: DashboardState = Depends(get_state),
):
    series = _require(series, "Series ID is required")
    return await _guard("FRED data",
                        lambda: _fred_observations(state, series, start_date, end_date))


@router.get("/fred-release", tags=["FRED"])
async def fred_release(seriesId: Optional[str] = None, state: DashboardState = Depends(get_state)):
    series_id = _require(seriesId, "Series ID required")
    return await _guard("FRED release info", lambda: read_through(
        state.cache, f"fred_release:{series_id}", ttl_for("fred_release", state.mode.degraded),
        lambda: state.fred.release_summary(series_id),
    ))


@router.get("/fred-releases-dates", tags=["FRED"])
async def fred_releases_dates(
    realtime_start: Optional[str] = None,
    realtime_end: Optional[str] = None,
    limit: Optional[str] = None,
    sort_order: Optional[str] = None,
    include_release_dates_with_no_data: Optional[str] = None,
    state: DashboardState = Depends(get_state),
):
    params = {
        "realtime_start": realtime_start,
        "realtime_end": realtime_end,
        "limit": limit,
        "sort_order": sort_order,
        "include_release_dates_with_no_data": include_release_dates_with_no_data,
    }
    key = "fred_releases:" + "_".join(params[k] or "" for k in params)
    return await _guard("FRED releases/dates data", lambda: read_through(
        state.cache, key, ttl_for("fred_releases", state.mode.degraded),
        lambda: state.fred.release_dates(**params),
    ))


@router.get("/fred-chart", tags=["FRED"])
async def fred_chart(
    series: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    axis: str = "monthly",
    value_type: str = "decimal",
    date_format: str = "MM/DD/YY",
    state: DashboardState = Depends(get_state),
):
    series = _require(series, "Series ID is required")
    if axis not in AXIS_TYPES:
        raise ValidationError(f"axis must be one of {', '.join(AXIS_TYPES)}")
    if value_type not in VALUE_TYPES:
        raise ValidationError(f"value_type must be one of {', '.join(VALUE_TYPES)}")
    if date_format not in DATE_FORMATS:
        raise ValidationError(f"date_format must be one of {', '.join(DATE_FORMATS)}")

    async def work():
        data = await _fred_observations(state, series, start_date, end_date)
        return build_chart_series(series, data.get("observations") or [],
                                  axis=axis, value_type=value_type, date_format=date_format)

    return await _guard("FRED chart data", work)


# ── calendar ─────────────────────────────────────────────────

@router.get("/economic-calendar", tags=["Calendar"])
async def economic_calendar(state: DashboardState = Depends(get_state)):
    today = datetime.now(timezone.utc).date()

    async def compute():
        return build_calendar(today)

    return await _guard("economic calendar", lambda: read_through(
        state.cache, f"calendar:{today.isoformat()}", ttl_for("calendar"), compute,
    ))


# ── insights ─────────────────────────────────────────────────

@router.get("/economic-insights", tags=["FRED"])
async def economic_insights(state: DashboardState = Depends(get_state)):
    async def work():
        results  = await state.fred_batch.fetch_all(INSIGHT_SERIES.values())
        readings = {}
        for metric_id, series_id in INSIGHT_SERIES.items():
            r = results.get(series_id)
            if r is None or not r.success or not isinstance(r.data, dict):
                continue
            reading = reading_from_observations(metric_id, r.data.get("observations") or [])
            if reading is not None:
                readings[metric_id] = reading
        if len(readings) < len(INSIGHT_SERIES):
            log.info(f"economic insights: {len(INSIGHT_SERIES) - len(readings)} series unavailable")
        out = build_insights(readings, datetime.now(timezone.utc).year)
        out["timestamp"] = int(time.time())
        return out

    return await _guard("economic insights", work)


# ── operator ─────────────────────────────────────────────────

@router.get("/network-mode", tags=["Operator"])
async def network_mode(state: DashboardState = Depends(get_state)):
    return state.mode.to_dict()


@router.post("/network-mode", tags=["Operator"])
async def set_network_mode(request: Request, state: DashboardState = Depends(get_state)):
    try:
        body = await request.json()
    except ValueError:
        body = None
    degraded = body.get("degraded") if isinstance(body, dict) else None
    if not isinstance(degraded, bool):
        raise ValidationError("Body must be {\"degraded\": true|false}")
    state.mode.set_degraded(degraded, source="operator")
    return state.mode.to_dict()


@router.get("/cache-warmer", tags=["Operator"])
async def cache_warmer_status(state: DashboardState = Depends(get_state)):
    if state.warmer is None:
        return {"running": False, "jobs": [], "last_run": None, "enabled": False}
    return {**state.warmer.status(), "enabled": True}


@router.post("/cache-warmer/run", tags=["Operator"])
async def cache_warmer_run(state: DashboardState = Depends(get_state)):
    if state.warmer is None:
        raise ValidationError("Cache warmer is disabled (set WARM_CACHE=true)")
    return await state.warmer.warm()
