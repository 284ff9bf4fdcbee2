from dashboard_engine.api.routes import router

__all__ = ["router"]
