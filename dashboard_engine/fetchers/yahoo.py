"""
Econ Dashboard — Yahoo Finance Fetcher
───────────────────────────────────────
Uses the v8/chart endpoint only; it is the one Yahoo surface that still
works without auth. The raw chart JSON is relayed to the client, with a
couple of helpers to summarise it server-side.
"""

import time
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx

from dashboard_engine.errors import UpstreamError
from dashboard_engine.fetchers.http import BROWSER_HEADERS, get_json

DEFAULT_CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"

_EXCHANGE_MAP = {
    "LON:": ".L",
    "EPA:": ".PA",
    "ETR:": ".DE",
    "AMS:": ".AS",
    "TSX:": ".TO",
    "ASX:": ".AX",
}


def normalise_symbol(symbol: str) -> str:
    symbol = symbol.upper().strip()
    for prefix, suffix in _EXCHANGE_MAP.items():
        if symbol.startswith(prefix):
            return symbol[len(prefix):] + suffix
    return symbol


class YahooFetcher:

    def __init__(self, client: httpx.AsyncClient, chart_url: str = DEFAULT_CHART_URL):
        self.client    = client
        self.chart_url = chart_url

    async def fetch_chart(
        self,
        symbol: str,
        range_: Optional[str] = None,
        interval: Optional[str] = None,
    ) -> dict:
        params = {}
        if range_:
            params["range"] = range_
        if interval:
            params["interval"] = interval
        url  = self.chart_url.format(symbol=normalise_symbol(symbol))
        data = await get_json(self.client, url, "Yahoo Finance",
                              params=params or None, headers=BROWSER_HEADERS)
        if not isinstance(data, dict) or "chart" not in data:
            raise UpstreamError(f"Yahoo Finance returned no chart for {symbol}")
        return data


def _first_result(chart: dict) -> Optional[dict]:
    result = (chart.get("chart") or {}).get("result") or []
    return result[0] if result else None


def quote_summary(symbol: str, chart: dict) -> Optional[dict]:
    """Condense a chart payload into a quote card. None when there is no price."""
    result = _first_result(chart)
    if not result:
        return None
    meta  = result.get("meta", {})
    price = meta.get("regularMarketPrice") or meta.get("previousClose")
    if not price:
        return None
    prev_close   = meta.get("previousClose") or meta.get("chartPreviousClose") or price
    market_state = meta.get("marketState", "CLOSED")
    if market_state == "PRE":
        price = meta.get("preMarketPrice") or price
    elif market_state == "POST":
        price = meta.get("postMarketPrice") or price
    change     = price - prev_close
    change_pct = (change / prev_close * 100) if prev_close else 0
    return {
        "symbol": symbol,
        "price": round(float(price), 4),
        "change": round(float(change), 4),
        "change_pct": round(float(change_pct), 4),
        "prev_close": round(float(prev_close), 4),
        "currency": meta.get("currency", "USD"),
        "market_state": market_state,
        "exchange": meta.get("exchangeName", ""),
        "name": meta.get("shortName") or meta.get("longName") or symbol,
        "volume": meta.get("regularMarketVolume"),
        "day_high": meta.get("regularMarketDayHigh"),
        "day_low": meta.get("regularMarketDayLow"),
        "fifty_two_week_high": meta.get("fiftyTwoWeekHigh"),
        "fifty_two_week_low": meta.get("fiftyTwoWeekLow"),
        "timestamp": int(time.time()),
        "source": "yahoo_finance",
    }


def parse_history(symbol: str, chart: dict) -> Dict[str, List]:
    """
    Flatten chart timestamps + OHLCV into parallel lists, dropping bars
    with no close. Missing open/high/low fall back to the close.
    """
    result = _first_result(chart)
    if not result:
        raise UpstreamError(f"Invalid chart structure for {symbol}")
    timestamps = result.get("timestamp") or []
    quote      = ((result.get("indicators") or {}).get("quote") or [{}])[0]
    closes     = quote.get("close") or []
    if not timestamps or not closes:
        raise UpstreamError(f"No price data available for {symbol}")

    def _col(name: str, i: int, default):
        values = quote.get(name) or []
        v = values[i] if i < len(values) else None
        return v if v is not None else default

    out: Dict[str, List] = {"dates": [], "prices": [], "opens": [],
                            "highs": [], "lows": [], "volumes": []}
    for i, ts in enumerate(timestamps):
        close = closes[i] if i < len(closes) else None
        if close is None:
            continue
        out["dates"].append(datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat())
        out["prices"].append(close)
        out["opens"].append(_col("open", i, close))
        out["highs"].append(_col("high", i, close))
        out["lows"].append(_col("low", i, close))
        out["volumes"].append(_col("volume", i, 0))

    if not out["prices"]:
        raise UpstreamError(f"No valid price data found for {symbol}")
    return out
