"""
Econ Dashboard — Series & Ticker Catalog
─────────────────────────────────────────
Everything the dashboard tabs display. The cache warmer prefetches this set
so the first page load is served from cache.
"""

from typing import Dict, List

# ── Economic indicators (display order) ──────────────────────
ECONOMIC_SERIES: Dict[str, str] = {
    "coreCPI":           "CPILFESL",            # Core CPI index
    "corePPI":           "WPSFD4131",           # Core PPI index
    "corePCE":           "PCEPILFE",            # Core PCE index
    "gdp":               "A191RL1Q225SBEA",     # Real GDP QoQ annualised %
    "tradeDeficit":      "BOPGSTB",             # Trade balance, $bn
    "unemployment":      "UNRATE",              # %
    "joblessClaims":     "ICSA",                # thousands
    "retailSales":       "MRTSMPCSM44000USS",   # MoM %
    "durableGoods":      "DGORDER",             # $m
    "newHomeSales":      "HSN1F",               # thousands
    "existingHomeSales": "EXHOSLUSM495S",       # millions
    "consumerSentiment": "UMCSENT",             # index
}

# ── Rates ────────────────────────────────────────────────────
RATES_SERIES: Dict[str, str] = {
    "fedFunds":     "DFEDTARU",
    "treasury2yr":  "DGS2",
    "treasury5yr":  "DGS5",
    "treasury10yr": "DGS10",
    "treasury30yr": "DGS30",
    "sofr1m":       "SOFR30DAYAVG",
    "tbill3m":      "DTB3",
    "highYield":    "BAMLH0A0HYM2",
}

# ── H.8 banking data (weekly, NSA; borrowings in $m, rest in $bn) ──
H8_SERIES: Dict[str, str] = {
    "totalLoans":        "LLBDCBW027NBOG",
    "ciLoans":           "CILDCBW027NBOG",
    "consumerLoans":     "CLSDCBW027SBOG",
    "creLoans":          "CREDCBW027NBOG",
    "otherLoans":        "AOLDCBW027NBOG",
    "deposits":          "DPSDCBW027NBOG",
    "largeTimeDeposits": "LTDDCBW027NBOG",
    "otherDeposits":     "ODSDCBW027NBOG",
    "borrowings":        "H8B3094NDMD",
}

# ── Markets tab ──────────────────────────────────────────────
MARKET_TICKERS:    List[str] = ["SPY", "DIA", "QQQ", "IWM"]
COMMODITY_TICKERS: List[str] = ["GLD", "SLV", "USO", "UUP"]

# ── Peer regional banks ──────────────────────────────────────
PEER_BANK_TICKERS: List[str] = [
    "TCBI", "PNC", "USB", "TFC", "RF", "CFR", "HBAN", "ZION", "PB", "BOKF",
]
PEER_BANK_INDEX = "^KRX"


def all_fred_series() -> List[str]:
    return list(ECONOMIC_SERIES.values()) + list(RATES_SERIES.values()) + list(H8_SERIES.values())


def all_yahoo_tickers() -> List[str]:
    return MARKET_TICKERS + COMMODITY_TICKERS + PEER_BANK_TICKERS + [PEER_BANK_INDEX]
