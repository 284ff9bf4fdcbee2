"""
Period returns over a daily close series, counted in trading days.
YTD starts at the first session of the current year when dates are given;
without dates, or with no bar in the current year, it starts at the first point.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from dashboard_engine.charts.chart_utils import parse_date

# period → trading-day lookback
LOOKBACKS = (
    ("1W", 5),
    ("1M", 21),
    ("3M", 63),
    ("1Y", 252),
)


def _pct(current: float, past: float) -> float:
    return (current - past) / past * 100


def year_start_index(dates: Sequence[Any], year: int) -> int:
    for i, d in enumerate(dates):
        parsed = parse_date(d)
        if parsed is not None and parsed.year == year:
            return i
    return 0


def calculate_period_returns(
    prices: Sequence[float],
    dates: Optional[Sequence[Any]] = None,
    today: Optional[date] = None,
) -> Dict[str, float]:
    if dates is not None:
        pairs = [(p, d) for p, d in zip(prices, dates) if p is not None]
        clean: List[float] = [p for p, _ in pairs]
        clean_dates = [d for _, d in pairs]
    else:
        clean = [p for p in prices if p is not None]
        clean_dates = []
    if not clean:
        return {}

    current = clean[-1]
    out: Dict[str, float] = {}
    for period, n in LOOKBACKS:
        if len(clean) >= n and clean[-n]:
            out[period] = _pct(current, clean[-n])

    year  = (today or datetime.now(timezone.utc).date()).year
    start = year_start_index(clean_dates, year) if clean_dates else 0
    if clean[start]:
        out["YTD"] = _pct(current, clean[start])
    return out
