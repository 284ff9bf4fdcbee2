"""
Econ Dashboard — Economic Insights
───────────────────────────────────
Plain-language outlook lines built from the latest catalog readings.

  inflation   core CPI / PCE / PPI year-over-year vs. the 2% target
  labor       unemployment rate and initial jobless claims
  fed         policy bias implied by inflation, unemployment and GDP
  rates       2s10s curve shape and the direction of the 2-year yield
  metrics     one short line per indicator card

Missing readings count as 0, so a partial FRED outage still yields text.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from dashboard_engine.catalog import ECONOMIC_SERIES, RATES_SERIES

INFLATION_TARGET = 2.0

INSIGHT_SERIES: Dict[str, str] = {
    **ECONOMIC_SERIES,
    "treasury2yr":  RATES_SERIES["treasury2yr"],
    "treasury10yr": RATES_SERIES["treasury10yr"],
}

# Price indices are read as YoY %, durable goods orders as MoM %; the rest as levels.
_TRANSFORMS: Dict[str, int] = {
    "coreCPI":      12,
    "corePCE":      12,
    "corePPI":      12,
    "durableGoods": 1,
}

DEFAULT_METRIC_SUMMARY = "Data released, analyzing market implications"


@dataclass
class Reading:
    value:    float
    previous: Optional[float] = None


def _values(observations: Iterable[dict]) -> List[float]:
    """FRED observations (newest first) → floats, skipping "." gaps."""
    out = []
    for o in observations:
        try:
            out.append(float(o["value"]))
        except (KeyError, TypeError, ValueError):
            continue
    return out


def reading_from_observations(metric_id: str, observations: Iterable[dict]) -> Optional[Reading]:
    values = _values(observations)
    lag = _TRANSFORMS.get(metric_id)
    if lag:
        series = [
            round((values[i] / values[i + lag] - 1) * 100, 2)
            for i in range(min(2, len(values) - lag))
            if values[i + lag]
        ]
    else:
        series = values[:2]
    if not series:
        return None
    return Reading(series[0], series[1] if len(series) > 1 else None)


def _v(data: Dict[str, Reading], key: str) -> float:
    r = data.get(key)
    return r.value if r is not None else 0.0


def trend(values: List[float]) -> str:
    if len(values) < 2:
        return "stable"
    recent, previous = values[-1], values[-2]
    if recent > previous * 1.02:
        return "rising"
    if recent < previous * 0.98:
        return "declining"
    return "stable"


def analyze_inflation(data: Dict[str, Reading]) -> str:
    cpi, pce, ppi = _v(data, "coreCPI"), _v(data, "corePCE"), _v(data, "corePPI")
    avg       = (cpi + pce) / 2
    direction = trend([cpi, pce, ppi])

    if avg > INFLATION_TARGET + 1:
        if direction == "declining":
            return "Inflation cooling but remains well above Fed's 2% target"
        return "Inflation remains stubbornly elevated above target"
    if avg > INFLATION_TARGET:
        if direction == "declining":
            return "Inflation moderating toward Fed's target"
        return "Inflation remains sticky above target"
    return "Inflation approaching Fed's 2% target"


def analyze_labor_market(data: Dict[str, Reading]) -> str:
    unemployment = _v(data, "unemployment")
    claims       = int(_v(data, "joblessClaims"))

    if unemployment < 4.0 and claims < 250_000:
        return "while labor market remains robust"
    if unemployment < 4.5 and claims < 300_000:
        return "with labor market showing resilience"
    if unemployment > 4.5:
        return "as labor market shows signs of softening"
    return "while job market stays balanced"


def analyze_fed_policy(data: Dict[str, Reading], year: int) -> str:
    inflation    = (_v(data, "coreCPI") + _v(data, "corePCE")) / 2
    unemployment = _v(data, "unemployment")
    gdp          = _v(data, "gdp")

    if inflation > 3 and unemployment < 4:
        return f"Fed likely to maintain higher rates through {year}"
    if inflation > 2.5:
        return "Fed expected to proceed cautiously with gradual rate adjustments"
    if unemployment > 4.5 or gdp < 1:
        return "Fed may pivot to more accommodative stance if growth slows"
    return "Fed poised for measured approach to policy normalization"


def economic_summary(data: Dict[str, Reading], year: int) -> str:
    return f"{analyze_inflation(data)} {analyze_labor_market(data)}. {analyze_fed_policy(data, year)}."


def rates_summary(data: Dict[str, Reading]) -> str:
    two_year = data.get("treasury2yr")
    spread   = _v(data, "treasury10yr") - _v(data, "treasury2yr")

    curve = "Yield curve normalizing" if spread > 0 else "Yield curve remains inverted"
    prev  = two_year.previous if two_year and two_year.previous is not None else 0.0
    now   = two_year.value if two_year else 0.0
    if now > prev:
        direction = "rates drift higher"
    elif now < prev:
        direction = "yields decline"
    else:
        direction = "rates hold steady"
    implication = ("signaling ongoing recession concerns" if spread < 0
                   else "reflecting improved growth outlook")
    return f"{curve} as {direction}, {implication}."


# ── per-card lines ───────────────────────────────────────────

def _core_cpi(cur, prev, expected):
    if cur > prev and cur > expected:
        return "Inflation accelerates beyond expectations, challenging Fed policy"
    if cur < prev:
        return "Core inflation cools, supporting potential Fed pause"
    return "Inflation remains sticky at elevated levels"


def _core_ppi(cur, prev, expected):
    if cur > prev:
        return "Producer prices rise, signaling pipeline inflation pressure"
    if cur < prev:
        return "Producer inflation eases, relieving cost pressures"
    return "Producer prices stable, minimal inflation pass-through"


def _core_pce(cur, prev, expected):
    if cur > 2.5:
        return "Fed's preferred gauge remains above comfort zone"
    if cur < prev:
        return "PCE inflation moderates toward Fed target"
    return "Core PCE holds steady near target levels"


def _gdp(cur, prev, expected):
    if cur > 2.5:
        return "Economy expands robustly above trend growth"
    if cur < 1:
        return "Growth stalls, raising recession concerns"
    return "Moderate expansion continues at sustainable pace"


def _unemployment(cur, prev, expected):
    if cur < 3.8:
        return "Job market remains historically tight"
    if cur > prev + 0.2:
        return "Unemployment rises, labor market softening"
    return "Employment conditions remain stable and balanced"


def _jobless_claims(cur, prev, expected):
    claims = int(cur)
    if claims > 250_000:
        return "Claims elevated, suggesting rising layoff activity"
    if claims < 200_000:
        return "Minimal layoffs reflect strong labor demand"
    return "Claims normal, job market remains healthy"


def _retail_sales(cur, prev, expected):
    if cur > 0.5:
        return "Consumer spending surges, economy resilient"
    if cur < 0:
        return "Retail sales contract, consumer pullback evident"
    return "Modest spending growth maintains economic momentum"


def _durable_goods(cur, prev, expected):
    if cur > 1:
        return "Strong orders signal business investment confidence"
    if cur < -0.5:
        return "Orders decline sharply, manufacturing weakness persists"
    return "Factory orders steady, manufacturing stabilizing"


def _new_home_sales(cur, prev, expected):
    if cur > prev * 1.05:
        return "New home sales jump despite mortgage rates"
    if cur < prev * 0.95:
        return "Housing demand weakens amid affordability challenges"
    return "Home sales steady as market finds balance"


def _existing_home_sales(cur, prev, expected):
    if cur > prev * 1.03:
        return "Existing sales rebound, housing market thaws"
    if cur < prev * 0.97:
        return "Sales slump continues, inventory remains tight"
    return "Housing market stable despite rate headwinds"


def _consumer_sentiment(cur, prev, expected):
    if cur > 75:
        return "Consumer confidence strong, supporting spending outlook"
    if cur < 60:
        return "Sentiment depressed, recession fears weigh"
    return "Confidence improving but remains below average"


_METRIC_RULES: Dict[str, Callable[[float, float, float], str]] = {
    "coreCPI":           _core_cpi,
    "corePPI":           _core_ppi,
    "corePCE":           _core_pce,
    "gdp":               _gdp,
    "unemployment":      _unemployment,
    "joblessClaims":     _jobless_claims,
    "retailSales":       _retail_sales,
    "durableGoods":      _durable_goods,
    "newHomeSales":      _new_home_sales,
    "existingHomeSales": _existing_home_sales,
    "consumerSentiment": _consumer_sentiment,
}


def metric_summary(metric_id: str, current: Optional[float], previous: Optional[float] = None,
                   consensus: Optional[float] = None) -> str:
    rule = _METRIC_RULES.get(metric_id)
    if rule is None:
        return DEFAULT_METRIC_SUMMARY
    cur  = current or 0.0
    prev = previous or 0.0
    return rule(cur, prev, consensus if consensus is not None else cur)


def build_insights(readings: Dict[str, Reading], year: int) -> dict:
    metrics = {}
    for metric_id, series_id in INSIGHT_SERIES.items():
        r = readings.get(metric_id)
        if r is None:
            continue
        metrics[metric_id] = {
            "seriesId": series_id,
            "value":    r.value,
            "previous": r.previous,
            "summary":  metric_summary(metric_id, r.value, r.previous),
        }
    return {
        "summary":   economic_summary(readings, year),
        "inflation": analyze_inflation(readings),
        "labor":     analyze_labor_market(readings),
        "fed":       analyze_fed_policy(readings, year),
        "rates":     rates_summary(readings),
        "metrics":   metrics,
        "missing":   [m for m in INSIGHT_SERIES if m not in readings],
    }
