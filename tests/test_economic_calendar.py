"""
tests/test_economic_calendar.py
────────────────────────────────
30-day calendar built from fixed dates so the heuristics are deterministic.
"""

from datetime import date, timedelta

from dashboard_engine.econ_calendar import DISCLAIMER, build_calendar

TODAY = date(2026, 10, 19)   # a Monday


def _by_name(events, name):
    return [e["date"] for e in events if e["name"] == name]


class TestWindow:

    def test_all_events_inside_window_and_sorted(self) -> None:
        events = build_calendar(TODAY)["events"]
        dates = [e["date"] for e in events]

        assert dates == sorted(dates)
        assert dates[0] >= TODAY.isoformat()
        assert dates[-1] <= (TODAY + timedelta(days=30)).isoformat()

    def test_disclaimer_and_timestamp(self) -> None:
        cal = build_calendar(TODAY)
        assert cal["disclaimer"] == DISCLAIMER
        assert cal["generated"]


class TestFomc:

    def test_confirmed_meeting_in_window(self) -> None:
        events = build_calendar(TODAY)["events"]
        fomc = [e for e in events if e["name"] == "FOMC Rate Decision"]

        assert [e["date"] for e in fomc] == ["2026-11-03"]
        assert fomc[0]["confirmed"] is True
        assert fomc[0]["impact"] == "high"
        assert "time" not in fomc[0]

    def test_past_meetings_excluded(self) -> None:
        events = build_calendar(date(2026, 12, 20))["events"]
        assert _by_name(events, "FOMC Rate Decision") == []


class TestEstimatedReleases:

    def test_jobless_claims_every_thursday(self) -> None:
        events = build_calendar(TODAY)["events"]
        assert _by_name(events, "Initial Jobless Claims") == [
            "2026-10-22", "2026-10-29", "2026-11-05", "2026-11-12",
        ]

    def test_employment_on_first_friday(self) -> None:
        events = build_calendar(TODAY)["events"]
        assert _by_name(events, "Employment Situation") == ["2026-11-06"]

    def test_mid_month_releases(self) -> None:
        events = build_calendar(TODAY)["events"]

        assert _by_name(events, "Consumer Price Index") == [f"2026-11-{d}" for d in range(10, 15)]
        assert _by_name(events, "Producer Price Index") == [f"2026-11-{d}" for d in range(13, 17)]
        assert _by_name(events, "Retail Sales") == [f"2026-11-{d}" for d in range(15, 18)]

    def test_estimates_are_unconfirmed_with_time(self) -> None:
        estimated = [e for e in build_calendar(TODAY)["events"] if e["name"] != "FOMC Rate Decision"]
        assert estimated
        assert all(e["confirmed"] is False and e["time"] == "08:30" for e in estimated)

    def test_today_itself_is_not_estimated(self) -> None:
        # 2026-11-12 is a Thursday; only FOMC dates may land on "today"
        events = build_calendar(date(2026, 11, 12))["events"]
        assert "2026-11-12" not in _by_name(events, "Initial Jobless Claims")

    def test_window_crosses_year_end(self) -> None:
        events = build_calendar(date(2026, 12, 20))["events"]
        assert _by_name(events, "Employment Situation") == ["2027-01-01"]


async def test_endpoint(app_client) -> None:
    resp = await app_client.get("/api/economic-calendar")

    assert resp.status_code == 200
    body = resp.json()
    assert body["disclaimer"] == DISCLAIMER
    assert isinstance(body["events"], list)
