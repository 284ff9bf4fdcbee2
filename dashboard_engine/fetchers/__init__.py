from dashboard_engine.fetchers.fred import FredFetcher
from dashboard_engine.fetchers.http import BROWSER_HEADERS, build_client, get_json
from dashboard_engine.fetchers.yahoo import YahooFetcher, normalise_symbol, parse_history, quote_summary

__all__ = [
    "BROWSER_HEADERS",
    "FredFetcher",
    "YahooFetcher",
    "build_client",
    "get_json",
    "normalise_symbol",
    "parse_history",
    "quote_summary",
]
