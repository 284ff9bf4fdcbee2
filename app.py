import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from dashboard_engine import __version__
from dashboard_engine.api import router as api_router
from dashboard_engine.cache import Cache, connect_cache
from dashboard_engine.config import Settings, get_settings
from dashboard_engine.errors import DashboardError
from dashboard_engine.state import build_state

logging.basicConfig(level=get_settings().log_level, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger("ed.app")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception(f"{request.url.path}: unhandled {exc.__class__.__name__}")
    return JSONResponse({"error": "Internal server error", "details": str(exc) or exc.__class__.__name__},
                        status_code=500, headers=CORS_HEADERS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.state.dashboard
    if state.settings.redis_url:
        state.use_cache(await connect_cache(state.settings.redis_url, state.settings.cache_maxsize))
    if state.warmer:
        state.warmer.start()
    yield
    await state.aclose()


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
    cache: Optional[Cache] = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Econ Dashboard API",
        description="FRED and Yahoo Finance proxy for the economic dashboard. Cached, CORS-open.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dashboard = build_state(settings, client=client, cache=cache)

    # Every response is CORS-open and every preflight succeeds, whatever the path.
    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        try:
            response = await call_next(request)
        except Exception as exc:
            return _internal_error(request, exc)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(DashboardError)
    async def handle_dashboard_error(request: Request, exc: DashboardError):
        if exc.status_code >= 500:
            log.error(f"{request.url.path}: {exc.message} ({exc.details})")
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": "Invalid request", "details": str(exc.errors())}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        return _internal_error(request, exc)

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"status": "ok", "docs": "/docs", "api": "/api/yahoo-batch?symbols=SPY,QQQ"}

    @app.get("/health")
    async def health(request: Request):
        state = request.app.state.dashboard
        return {
            "status": "healthy",
            "cache": getattr(state.cache, "backend", "unknown"),
            "network_mode": state.mode.to_dict()["mode"],
            "version": __version__,
        }

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:create_app", factory=True, host="0.0.0.0", port=get_settings().port,
                reload=False, log_level="info")
