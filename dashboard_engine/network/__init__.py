from dashboard_engine.network.fallback import REFERENCE_QUOTES, fallback_quote
from dashboard_engine.network.mode import NetworkMode

__all__ = ["NetworkMode", "REFERENCE_QUOTES", "fallback_quote"]
