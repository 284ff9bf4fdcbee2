"""
Econ Dashboard — Economic Calendar
───────────────────────────────────
Upcoming market-moving US releases for the next 30 days.

  FOMC decisions    published a year ahead by the Fed  → confirmed
  Everything else   estimated from typical release days → unconfirmed

Estimation rules (per calendar day):
  Thursday              Initial Jobless Claims   DOL     medium
  day 10–14             Consumer Price Index     BLS     high
  day 13–16             Producer Price Index     BLS     medium
  Friday, day ≤ 7       Employment Situation     BLS     high
  day 15–17             Retail Sales             Census  medium
"""

from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

WINDOW_DAYS = 30

DISCLAIMER = ("Dates estimated based on historical patterns. "
              "Check official sources for confirmation.")

FOMC_DATES: Dict[int, List[str]] = {
    2026: [
        "2026-01-28", "2026-03-17", "2026-05-05", "2026-06-16",
        "2026-07-28", "2026-09-15", "2026-11-03", "2026-12-15",
    ],
}

_THURSDAY = 3
_FRIDAY   = 4


def _event(day: date, name: str, impact: str, source: str,
           confirmed: bool, time: Optional[str] = None) -> dict:
    ev = {
        "date":      day.isoformat(),
        "name":      name,
        "impact":    impact,
        "source":    source,
        "confirmed": confirmed,
    }
    if time:
        ev["time"] = time
    return ev


def fomc_events(years: List[int]) -> List[dict]:
    out = []
    for year in years:
        for d in FOMC_DATES.get(year, []):
            out.append(_event(date.fromisoformat(d), "FOMC Rate Decision",
                              "high", "Federal Reserve", True))
    return out


def estimated_releases(today: date, days: int = WINDOW_DAYS) -> List[dict]:
    out = []
    for i in range(1, days + 1):
        d   = today + timedelta(days=i)
        dom = d.day
        dow = d.weekday()

        if dow == _THURSDAY:
            out.append(_event(d, "Initial Jobless Claims", "medium", "DOL", False, "08:30"))
        if 10 <= dom <= 14:
            out.append(_event(d, "Consumer Price Index", "high", "BLS", False, "08:30"))
        if 13 <= dom <= 16:
            out.append(_event(d, "Producer Price Index", "medium", "BLS", False, "08:30"))
        if dow == _FRIDAY and dom <= 7:
            out.append(_event(d, "Employment Situation", "high", "BLS", False, "08:30"))
        if 15 <= dom <= 17:
            out.append(_event(d, "Retail Sales", "medium", "Census", False, "08:30"))
    return out


def build_calendar(today: Optional[date] = None) -> dict:
    today   = today or datetime.now(timezone.utc).date()
    horizon = today + timedelta(days=WINDOW_DAYS)

    events = fomc_events(sorted({today.year, horizon.year}))
    events += estimated_releases(today)

    upcoming = [e for e in events if today <= date.fromisoformat(e["date"]) <= horizon]
    upcoming.sort(key=lambda e: e["date"])

    return {
        "events":     upcoming,
        "generated":  datetime.now(timezone.utc).isoformat(),
        "disclaimer": DISCLAIMER,
    }
