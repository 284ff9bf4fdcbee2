"""
Econ Dashboard — Reference Fallback Data
─────────────────────────────────────────
Typical-range reference levels served while the operator has the service in
degraded mode and a live fetch fails. Every payload is flagged `fallback`
so the dashboard can badge it. These are not market data.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

# symbol → (name, reference price, reference volume)
REFERENCE_QUOTES: Dict[str, tuple] = {
    "SPY":     ("SPDR S&P 500 ETF",         445.00,  90_000_000),
    "QQQ":     ("Invesco QQQ Trust",        365.00,  50_000_000),
    "DIA":     ("SPDR Dow Jones ETF",       350.00,   5_000_000),
    "^VIX":    ("CBOE Volatility Index",     18.00,           0),
    "GC=F":    ("Gold Futures",            2000.00,     300_000),
    "CL=F":    ("Crude Oil Futures",         80.00,     500_000),
    "BTC-USD": ("Bitcoin USD",            35000.00, 20_000_000_000),
}

WARNING = "Reference data - live market data unavailable on this network"


def fallback_quote(symbol: str) -> Optional[dict]:
    ref = REFERENCE_QUOTES.get(symbol.upper())
    if ref is None:
        return None
    name, price, volume = ref
    return {
        "symbol":   symbol,
        "name":     name,
        "price":    price,
        "change":   0.0,
        "change_pct": 0.0,
        "volume":   volume,
        "lastUpdate": datetime.now(timezone.utc).isoformat(),
        "fallback": True,
        "warning":  WARNING,
    }
