"""
tests/test_fred_endpoints.py
─────────────────────────────
FRED passthrough, release info, release calendar, chart shaping and batch.
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from conftest import fred_payload


@pytest.fixture
async def keyless_client(make_app):
    app = make_app(fred_api_key="")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestFredSeries:

    async def test_passthrough_with_params(self, app_client, upstream) -> None:
        resp = await app_client.get("/api/fred", params={"series": "UNRATE", "start_date": "2026-01-01"})

        assert resp.status_code == 200
        assert resp.json() == fred_payload("UNRATE")
        params = upstream.calls[0].url.params
        assert upstream.calls[0].url.path == "/fred/series/observations"
        assert params["api_key"] == "test-key"
        assert params["file_type"] == "json"
        assert params["sort_order"] == "desc"
        assert params["observation_start"] == "2026-01-01"
        assert "observation_end" not in params

    async def test_cached_per_date_range(self, app_client, upstream) -> None:
        await app_client.get("/api/fred", params={"series": "UNRATE"})
        await app_client.get("/api/fred", params={"series": "UNRATE"})
        assert len(upstream.calls) == 1

        await app_client.get("/api/fred", params={"series": "UNRATE", "end_date": "2026-06-30"})
        assert len(upstream.calls) == 2

    async def test_missing_series(self, app_client, upstream) -> None:
        resp = await app_client.get("/api/fred")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Series ID is required"}
        assert upstream.calls == []

    async def test_upstream_error(self, app_client, upstream) -> None:
        upstream.responses["BOGUS"] = 400
        resp = await app_client.get("/api/fred", params={"series": "BOGUS"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch FRED data", "details": "FRED API error: 400"}

    async def test_missing_api_key(self, keyless_client, upstream) -> None:
        resp = await keyless_client.get("/api/fred", params={"series": "UNRATE"})

        assert resp.status_code == 500
        assert resp.json()["details"] == "FRED API key is not configured"
        assert upstream.calls == []


class TestFredBatch:

    async def test_partial_failure(self, app_client, upstream) -> None:
        upstream.responses["BOGUS"] = 400
        resp = await app_client.get("/api/fred-batch", params={"symbols": "UNRATE,BOGUS,DGS10"})

        assert resp.status_code == 200
        body = resp.json()
        assert set(body) == {"UNRATE", "BOGUS", "DGS10"}
        assert body["UNRATE"]["observations"][0]["value"] == "4.3"
        assert body["BOGUS"] == {"error": "FRED API error: 400"}

    async def test_post(self, app_client) -> None:
        resp = await app_client.post("/api/fred-batch", json={"symbols": ["UNRATE"]})
        assert list(resp.json()) == ["UNRATE"]

    async def test_missing_key_fails_every_series(self, keyless_client) -> None:
        resp = await keyless_client.get("/api/fred-batch", params={"symbols": "UNRATE,DGS10"})

        assert resp.status_code == 200
        assert all(v == {"error": "FRED API key is not configured"} for v in resp.json().values())


class TestFredRelease:

    async def test_summary(self, app_client, upstream) -> None:
        upstream.fred_paths["/fred/series"] = {"seriess": [{
            "id": "UNRATE",
            "title": "Unemployment Rate",
            "units": "Percent",
            "frequency": "Monthly",
            "last_updated": "2026-10-02 07:48:02-05",
            "observation_start": "1948-01-01",
            "observation_end": "2026-09-01",
        }]}

        resp = await app_client.get("/api/fred-release", params={"seriesId": "UNRATE"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["seriesId"] == "UNRATE"
        assert body["title"] == "Unemployment Rate"
        assert body["frequency"] == "Monthly"
        assert body["current"] == {"date": "2026-09-01", "value": "4.3"}
        assert body["previous"] == {"date": "2026-08-01", "value": "4.2"}

        obs_call = next(c for c in upstream.calls if c.url.path.endswith("/observations"))
        assert obs_call.url.params["limit"] == "2"

    async def test_missing_id(self, app_client) -> None:
        resp = await app_client.get("/api/fred-release")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Series ID required"}


class TestFredReleaseDates:

    async def test_forwards_params_and_caches(self, app_client, upstream) -> None:
        payload = {"release_dates": [{"release_id": 10, "release_name": "CPI", "date": "2026-11-12"}]}
        upstream.fred_paths["/fred/releases/dates"] = payload

        resp = await app_client.get("/api/fred-releases-dates", params={"limit": "5"})
        again = await app_client.get("/api/fred-releases-dates", params={"limit": "5"})

        assert resp.json() == payload == again.json()
        assert len(upstream.calls) == 1
        params = upstream.calls[0].url.params
        assert params["limit"] == "5"
        assert "sort_order" not in params

    async def test_upstream_failure(self, app_client, upstream) -> None:
        upstream.responses["/fred/releases/dates"] = httpx.ReadTimeout("slow")
        resp = await app_client.get("/api/fred-releases-dates")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch FRED releases/dates data",
                               "details": "FRED API timeout"}


class TestFredChart:

    async def test_shapes_series(self, app_client, upstream) -> None:
        upstream.responses["UNRATE"] = fred_payload("UNRATE", [
            ("2026-09-01", "4.3"),
            ("2026-08-15", "."),
            ("2026-08-01", "4.2"),
            ("2026-07-01", "4.1"),
        ])

        resp = await app_client.get("/api/fred-chart",
                                    params={"series": "UNRATE", "value_type": "percentage"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["dates"] == ["2026-07-01", "2026-08-01", "2026-09-01"]
        assert body["values"] == [4.1, 4.2, 4.3]
        assert body["labels"] == ["Jul '26", "Aug '26", "Sep '26"]
        assert body["tooltips"] == ["07/01/26", "08/01/26", "09/01/26"]
        assert body["formatted"] == ["4.10%", "4.20%", "4.30%"]
        assert body["bounds"] == {"min": 4.1, "max": 4.3}
        assert body["latest"] == 4.3

    async def test_rejects_unknown_axis(self, app_client, upstream) -> None:
        resp = await app_client.get("/api/fred-chart", params={"series": "UNRATE", "axis": "yearly"})

        assert resp.status_code == 400
        assert resp.json()["error"].startswith("axis must be one of")
        assert upstream.calls == []
