"""
Econ Dashboard — Configuration
───────────────────────────────
Every tunable comes from the environment (or a local .env file).
Settings are read once into a dataclass so tests can build their own.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    fred_api_key:      str   = ""
    fred_base_url:     str   = "https://api.stlouisfed.org/fred"
    yahoo_chart_url:   str   = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"
    redis_url:         str   = ""
    cache_maxsize:     int   = 1024
    max_batch_symbols: int   = 50
    max_concurrency:   int   = 10
    request_timeout:   float = 8.0
    batch_deadline:    float = 20.0
    degraded_mode:     bool  = False
    warm_cache:        bool  = False
    warm_interval:     int   = 3600
    log_level:         str   = "INFO"
    port:              int   = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            fred_api_key      = os.getenv("FRED_API_KEY", ""),
            fred_base_url     = os.getenv("FRED_BASE_URL", cls.fred_base_url),
            yahoo_chart_url   = os.getenv("YAHOO_CHART_URL", cls.yahoo_chart_url),
            redis_url         = os.getenv("REDIS_URL", ""),
            cache_maxsize     = int(os.getenv("CACHE_MAXSIZE", "1024")),
            max_batch_symbols = int(os.getenv("MAX_BATCH_SYMBOLS", "50")),
            max_concurrency   = int(os.getenv("MAX_CONCURRENCY", "10")),
            request_timeout   = float(os.getenv("REQUEST_TIMEOUT", "8")),
            batch_deadline    = float(os.getenv("BATCH_DEADLINE", "20")),
            degraded_mode     = _env_bool("DEGRADED_MODE"),
            warm_cache        = _env_bool("WARM_CACHE"),
            warm_interval     = int(os.getenv("WARM_INTERVAL", "3600")),
            log_level         = os.getenv("LOG_LEVEL", "INFO").upper(),
            port              = int(os.getenv("PORT", "8000")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
