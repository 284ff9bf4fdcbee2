"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the test suite.

Fixtures
--------
clock
    Manually advanced clock injected into ``MemoryTTLCache`` so TTL expiry
    is tested without sleeping.

upstream
    ``FakeUpstream`` behind ``httpx.MockTransport``: canned Yahoo chart and
    FRED responses per symbol, with a log of every outbound request.

make_app / app_client
    FastAPI app built by ``create_app`` with the fake upstream and cache
    injected, and an ``httpx.AsyncClient`` wired to it via ASGITransport.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/health")
        assert resp.status_code == 200
"""

import asyncio
from typing import AsyncGenerator, Callable, Dict, List, Optional

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app import create_app
from dashboard_engine.cache import MemoryTTLCache
from dashboard_engine.config import Settings


# ── Canned payloads ───────────────────────────────────────────────────────────


def chart_payload(symbol: str = "SPY", price: float = 100.0, prev_close: float = 95.0,
                  closes: Optional[List[Optional[float]]] = None,
                  start: int = 1735862400) -> dict:
    closes = closes if closes is not None else [prev_close, price]
    return {
        "chart": {
            "result": [{
                "meta": {
                    "symbol": symbol,
                    "regularMarketPrice": price,
                    "previousClose": prev_close,
                    "currency": "USD",
                    "exchangeName": "PCX",
                    "shortName": f"{symbol} Fund",
                    "regularMarketVolume": 1_000_000,
                },
                "timestamp": [start + i * 86400 for i in range(len(closes))],
                "indicators": {"quote": [{
                    "open":   list(closes),
                    "high":   list(closes),
                    "low":    list(closes),
                    "close":  list(closes),
                    "volume": [1000] * len(closes),
                }]},
            }],
            "error": None,
        }
    }


def fred_payload(series_id: str, values: Optional[List[tuple]] = None) -> dict:
    values = values or [("2026-09-01", "4.3"), ("2026-08-01", "4.2")]
    return {
        "series_id": series_id,
        "observations": [{"date": d, "value": v} for d, v in values],
    }


# ── Fake clock ────────────────────────────────────────────────────────────────


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ── Fake upstream ─────────────────────────────────────────────────────────────


class FakeUpstream:
    """
    Routes outbound requests by symbol/series.

    ``responses[symbol]`` may be a dict (200 JSON), an int (bare status),
    an ``httpx`` exception instance (raised), or a float (seconds to stall
    before answering with the default chart).
    """

    def __init__(self):
        self.responses: Dict[str, object] = {}
        self.fred_paths: Dict[str, dict] = {}
        self.calls: List[httpx.Request] = []

    def symbols_called(self) -> List[str]:
        return [self._symbol(r) for r in self.calls]

    @staticmethod
    def _symbol(request: httpx.Request) -> str:
        if "/v8/finance/chart/" in request.url.path:
            return request.url.path.rsplit("/", 1)[-1]
        return request.url.params.get("series_id", request.url.path)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        symbol = self._symbol(request)

        if request.url.path in self.fred_paths:
            return httpx.Response(200, json=self.fred_paths[request.url.path])

        canned = self.responses.get(symbol)
        if isinstance(canned, Exception):
            raise canned
        if isinstance(canned, int):
            return httpx.Response(canned, json={"error": "upstream"})
        if isinstance(canned, float):
            await asyncio.sleep(canned)
            canned = None
        if isinstance(canned, (dict, list)):
            return httpx.Response(200, json=canned)
        if "/fred/" in request.url.path:
            return httpx.Response(200, json=fred_payload(symbol))
        return httpx.Response(200, json=chart_payload(symbol))


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))


# ── App ───────────────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> Settings:
    return Settings(fred_api_key="test-key", request_timeout=1.0, batch_deadline=2.0)


@pytest.fixture
def make_app(settings: Settings, http_client: httpx.AsyncClient, clock: FakeClock) -> Callable:
    def _make(**overrides):
        for k, v in overrides.items():
            setattr(settings, k, v)
        return create_app(settings=settings, client=http_client,
                          cache=MemoryTTLCache(maxsize=settings.cache_maxsize, clock=clock))
    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
async def app_client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
