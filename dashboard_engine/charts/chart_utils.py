"""
Econ Dashboard — Chart Utilities
─────────────────────────────────
Standardised formatting shared by every dashboard tab, so the browser's
charting library only has to draw what it is given.

  axis labels      "Jan '26" on the first point of each month, "" elsewhere
  tooltip dates    MM/DD/YY · MM/DD/YYYY · MMM DD, 'YY
  values           currency · billions · trillions · % · bps · rate · index · volume
  period changes   markets/banking → signed %, rates → signed bps
"""

import math
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
_MONTH_INDEX = {m: i + 1 for i, m in enumerate(MONTHS)}

_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_SHORT_DATE = re.compile(r"^([A-Za-z]{3})\s?(\d{1,2})?$")

VALUE_TYPES = (
    "currency", "currencyBillions", "currencyTrillions", "percentage",
    "basisPoints", "rate", "index", "volume", "decimal",
)
DATE_FORMATS = ("MM/DD/YY", "MM/DD/YYYY", "MMM DD, YY")
AXIS_TYPES = ("monthly", "weekly", "raw")


def parse_date(value: Any, today: Optional[date] = None) -> Optional[date]:
    """
    Lenient date parsing for the shapes the dashboard actually sees:
    ISO dates/datetimes, M/D/YYYY, "Jul 24" and bare "Aug" (current year).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()

    m = _SLASH_DATE.match(s)
    if m:
        month, day, year = (int(g) for g in m.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    m = _SHORT_DATE.match(s)
    if m and m.group(1).title() in _MONTH_INDEX:
        year = (today or date.today()).year
        try:
            return date(year, _MONTH_INDEX[m.group(1).title()], int(m.group(2) or 1))
        except ValueError:
            return None

    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def _month_label(d: date) -> str:
    return f"{MONTHS[d.month - 1]} '{d.year % 100:02d}"


def format_axis(dates: Iterable[Any], kind: str = "monthly") -> List[str]:
    dates = list(dates)
    if kind not in ("monthly", "weekly"):
        return [str(d) for d in dates]

    labels: List[str] = []
    last_month = None
    for d in dates:
        parsed = parse_date(d)
        if parsed is None:
            labels.append("")
            continue
        if parsed.month != last_month:
            labels.append(_month_label(parsed))
            last_month = parsed.month
        else:
            labels.append("")
    return labels


def format_tooltip_date(value: Any, fmt: str = "MM/DD/YY") -> str:
    d = parse_date(value)
    if d is None:
        return str(value)
    if fmt == "MM/DD/YYYY":
        return d.strftime("%m/%d/%Y")
    if fmt == "MMM DD, YY":
        return f"{MONTHS[d.month - 1]} {d.day:02d}, '{d.year % 100:02d}"
    return d.strftime("%m/%d/%y")


def _is_number(value: Any) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and not math.isnan(value))


def format_value(value: Any, value_type: str = "currency") -> str:
    if not _is_number(value):
        return "N/A"
    v = float(value)

    if value_type == "currency":
        return f"${v:.2f}"
    if value_type == "currencyBillions":
        return f"${v:.1f}B"
    if value_type == "currencyTrillions":
        return f"${v / 1000:.1f}T"
    if value_type == "percentage":
        return f"{v:.2f}%"
    if value_type == "basisPoints":
        return f"{v:.0f} bps"
    if value_type == "rate":
        return f"{v:.3f}%"
    if value_type == "index":
        return f"{v:.0f}"
    if value_type == "volume":
        if v >= 1e9:
            return f"{v / 1e9:.1f}B"
        if v >= 1e6:
            return f"{v / 1e6:.1f}M"
        if v >= 1e3:
            return f"{v / 1e3:.1f}K"
        return f"{v:.0f}"
    return f"{v:.2f}"


def format_period_change(change: Any, tab: str = "markets") -> str:
    """
    Markets and banking report percent change (one decimal); rates report
    the change in percentage points as basis points.
    """
    if not _is_number(change):
        return "N/A"
    if tab == "rates":
        return f"{change * 100:+.0f} bps"
    return f"{change:+.1f}%"


def observations_to_series(observations: Iterable[dict]) -> Dict[str, List]:
    """FRED observations (any order, "." for missing) → ascending dates/values."""
    points = []
    for o in observations:
        try:
            points.append((o["date"], float(o["value"])))
        except (KeyError, TypeError, ValueError):
            continue
    points.sort(key=lambda p: p[0])
    return {"dates": [p[0] for p in points], "values": [p[1] for p in points]}


def build_chart_series(
    series_id: str,
    observations: Iterable[dict],
    axis: str = "monthly",
    value_type: str = "decimal",
    date_format: str = "MM/DD/YY",
) -> dict:
    s = observations_to_series(observations)
    values = s["values"]
    return {
        "series":    series_id,
        "dates":     s["dates"],
        "values":    values,
        "labels":    format_axis(s["dates"], axis),
        "tooltips":  [format_tooltip_date(d, date_format) for d in s["dates"]],
        "formatted": [format_value(v, value_type) for v in values],
        "bounds":    {"min": min(values), "max": max(values)} if values else None,
        "latest":    values[-1] if values else None,
    }
