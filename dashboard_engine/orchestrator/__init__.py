from dashboard_engine.orchestrator.batch import BatchCoordinator, FetchResult, parse_symbols
from dashboard_engine.orchestrator.scheduler import CacheWarmer

__all__ = ["BatchCoordinator", "CacheWarmer", "FetchResult", "parse_symbols"]
