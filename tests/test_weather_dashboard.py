# tests/test_weather_dashboard.py
from __future__ import annotations

import random

import pytest

import src.api.http as http
import src.viewmodels.weather_dashboard as wd
from src.api.errors import (
    GeolocationUnavailable,
    NetworkFailure,
    NetworkTimeout,
    NoCurrentData,
    NotFound,
)
from src.api.forecast import WEATHER_API_URL
from src.api.geocoding import GEOCODING_API_URL
from src.api.overlay import OverlayMode
from src.api.weather_models import Coordinate, CurrentConditions, Forecast, ResolvedLocation
from src.api.weather_viewmodel import MISSING
from src.viewmodels.weather_dashboard import DashboardStatus, WeatherDashboard

GEO_PAYLOADS = {
    "Paris": {"results": [{"latitude": 48.85341, "longitude": 2.3488, "name": "Paris", "country": "France"}]},
    "London": {
        "results": [{"latitude": 51.50853, "longitude": -0.12574, "name": "London", "country": "United Kingdom"}]
    },
}


def weather_payload() -> dict:
    return {
        "current": {
            "temperature_2m": 12.6,
            "relative_humidity_2m": 81,
            "apparent_temperature": 10.4,
            "weather_code": 61,
            "wind_speed_10m": 11.2,
            "wind_direction_10m": 200,
        },
        "daily": {
            "time": [f"2025-11-{11 + i:02d}" for i in range(6)],
            "weather_code": [61, 3, 0, 80, 95, 2],
            "temperature_2m_max": [13.1, 14.5, 15.0, 11.2, 9.9, 10.5],
            "temperature_2m_min": [7.2, 6.5, 5.0, 4.4, 3.3, 2.5],
            "precipitation_sum": [1.2, 0.0, 0.0, 4.5, 10.1, 0.3],
            "wind_speed_10m_max": [20.1, 15.3, 10.0, 25.5, 30.2, 12.0],
        },
    }


class DummyResp:
    def __init__(self, payload: dict):
        self._payload = payload
        self.status_code = 200

    def raise_for_status(self) -> None:
        return None

    def json(self) -> dict:
        return self._payload


class FakeOpenMeteo:
    """Korvaa requests.get:n ja vastaa geokoodaus- ja sääkyselyihin."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.current_overrides: dict = {}

    def __call__(self, url, params=None, timeout=None, headers=None):
        params = params or {}
        self.calls.append((url, params))
        if url == GEOCODING_API_URL:
            if "name" in params:
                return DummyResp(GEO_PAYLOADS.get(params["name"], {}))
            return DummyResp({})
        payload = weather_payload()
        payload["current"].update(self.current_overrides)
        return DummyResp(payload)

    def count(self, url: str) -> int:
        return sum(1 for u, _ in self.calls if u == url)


@pytest.fixture
def api(monkeypatch):
    fake = FakeOpenMeteo()
    monkeypatch.setattr(http.requests, "get", fake)
    monkeypatch.setattr(http, "report_error", lambda *a, **k: None)
    return fake


@pytest.fixture
def dashboard():
    return WeatherDashboard(rng=random.Random(7))


def _forecast() -> Forecast:
    current = CurrentConditions(
        temperature_c=5.0,
        feels_like_c=3.0,
        humidity_pct=70,
        wind_speed_kmh=8.0,
        wind_direction_deg=90.0,
        condition_code=0,
    )
    return Forecast(current=current, daily=[])


# --- alkutila ---------------------------------------------------------------------


def test_initial_state():
    d = WeatherDashboard()
    assert d.state.status is DashboardStatus.IDLE
    assert d.state.center == Coordinate(51.5074, -0.1278)
    assert d.state.mode is OverlayMode.TEMPERATURE
    assert d.state.location is None
    assert d.view.summary is None


def test_start_searches_default_city_once(api, dashboard):
    dashboard.start()

    assert dashboard.state.status is DashboardStatus.DISPLAYED
    assert dashboard.state.location.name == "London"
    assert dashboard.view.summary.title == "London, United Kingdom"
    assert api.calls[0][1]["name"] == "London"

    calls_before = len(api.calls)
    dashboard.start()
    assert len(api.calls) == calls_before


def test_denied_geolocation_on_new_session_still_gets_default_city(api, dashboard):
    def denied():
        raise GeolocationUnavailable("unsupported")

    dashboard.locate(denied)
    dashboard.start()

    assert dashboard.state.status is DashboardStatus.DISPLAYED
    assert dashboard.state.location.name == "London"
    assert len(dashboard.view.forecast) == 5
    assert dashboard.view.overlay is not None
    assert dashboard.view.overlay.center == dashboard.state.location.coordinate


def test_start_after_device_location_keeps_it(api, dashboard):
    coord = Coordinate(45.0, 5.0)
    dashboard.locate(lambda: coord)
    calls_before = len(api.calls)

    dashboard.start()

    assert len(api.calls) == calls_before
    assert dashboard.state.location.name == "Your Location"
    assert dashboard.state.center == coord


# --- haku nimellä -------------------------------------------------------------------


def test_submit_paris_end_to_end(api, dashboard):
    dashboard.submit("Paris")

    state = dashboard.state
    assert state.status is DashboardStatus.DISPLAYED
    assert state.location.country == "France"
    assert state.center == Coordinate(48.85341, 2.3488)
    assert len(state.forecast.daily) == 6

    view = dashboard.view
    assert view.summary_notice is None
    assert view.summary.title == "Paris, France"
    assert view.summary.temperature == "13°C"
    # 6 päivää haettu, 5 korttia näytetään (indeksit 1..5)
    assert len(view.forecast) == 5
    assert [c.date_label for c in view.forecast] == ["12/11", "13/11", "14/11", "15/11", "16/11"]

    assert len(state.samples) == 50
    assert view.overlay.center == state.center
    for s in state.samples:
        assert abs(s.latitude - 48.85341) <= 0.1 + 1e-9
        assert abs(s.longitude - 2.3488) <= 0.1 + 1e-9

    # geokoodaus ennen säähakua
    assert [u for u, _ in api.calls] == [GEOCODING_API_URL, WEATHER_API_URL]


@pytest.mark.parametrize("query", ["", "   "])
def test_submit_blank_fails_without_network(api, dashboard, query):
    dashboard.submit("Paris")
    cards = dashboard.view.forecast
    calls_before = len(api.calls)

    dashboard.submit(query)

    assert len(api.calls) == calls_before
    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.view.summary_notice == wd.Notice("error", "Please enter a city name")
    assert dashboard.view.forecast is cards
    assert dashboard.view.forecast_notice is None


def test_not_found_keeps_previous_forecast_cards(api, dashboard):
    dashboard.submit("Paris")
    cards = dashboard.view.forecast
    center = dashboard.state.center
    weather_calls = api.count(WEATHER_API_URL)

    dashboard.submit("Xyzzyville")

    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.state.error == NotFound.user_message
    assert dashboard.view.summary is None
    assert dashboard.view.summary_notice.kind == "error"
    assert dashboard.view.summary_notice.text == "City not found. Please try another city."
    # ennustealue ennallaan
    assert dashboard.view.forecast is cards
    assert dashboard.view.forecast_notice is None
    assert dashboard.state.center == center
    assert api.count(WEATHER_API_URL) == weather_calls


def test_first_lookup_failure_leaves_forecast_empty(api, dashboard):
    dashboard.submit("Xyzzyville")

    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.view.forecast is None
    assert dashboard.view.forecast_notice is None


def test_fetch_failure_discards_resolved_location(monkeypatch, dashboard):
    paris = ResolvedLocation(Coordinate(48.85, 2.35), "Paris", "France")
    monkeypatch.setattr(wd, "resolve_by_name", lambda q: paris)

    def no_current(coord):
        raise NoCurrentData("no current block")

    monkeypatch.setattr(wd, "fetch_forecast", no_current)

    dashboard.submit("Paris")

    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.state.error == "Error fetching weather data. Please try again."
    assert dashboard.state.location is None
    assert dashboard.state.center == Coordinate(51.5074, -0.1278)


def test_timeout_has_own_message(monkeypatch, dashboard):
    def slow(q):
        raise NetworkTimeout("timed out")

    monkeypatch.setattr(wd, "resolve_by_name", slow)

    dashboard.submit("Paris")

    assert dashboard.state.status is DashboardStatus.FAILED
    assert "did not respond in time" in dashboard.view.summary_notice.text


def test_unexpected_error_becomes_generic_message(monkeypatch, dashboard):
    def boom(q):
        raise KeyError("latitude")

    monkeypatch.setattr(wd, "resolve_by_name", boom)

    dashboard.submit("Paris")

    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.view.summary_notice.text == "Error fetching weather data. Please try again."


def test_loading_placeholders_while_fetching(monkeypatch, dashboard):
    paris = ResolvedLocation(Coordinate(48.85, 2.35), "Paris", "France")
    seen = {}

    def fetch(coord):
        seen["status"] = dashboard.state.status
        seen["summary_notice"] = dashboard.view.summary_notice
        seen["forecast_notice"] = dashboard.view.forecast_notice
        return _forecast()

    monkeypatch.setattr(wd, "resolve_by_name", lambda q: paris)
    monkeypatch.setattr(wd, "fetch_forecast", fetch)

    dashboard.submit("Paris")

    assert seen["status"] is DashboardStatus.LOADING
    assert seen["summary_notice"] == wd.Notice("loading", "Loading weather data...")
    assert seen["forecast_notice"] == wd.Notice("loading", "Loading forecast...")
    assert dashboard.state.status is DashboardStatus.DISPLAYED


def test_stale_result_is_dropped(monkeypatch, dashboard):
    paris = ResolvedLocation(Coordinate(48.85, 2.35), "Paris", "France")
    london = ResolvedLocation(Coordinate(51.5, -0.12), "London", "United Kingdom")
    monkeypatch.setattr(wd, "resolve_by_name", lambda q: paris if q == "Paris" else london)

    def fetch(coord):
        if coord == paris.coordinate:
            # uudempi haku valmistuu ennen tätä
            monkeypatch.setattr(wd, "fetch_forecast", lambda c: _forecast())
            dashboard.submit("London")
        return _forecast()

    monkeypatch.setattr(wd, "fetch_forecast", fetch)

    dashboard.submit("Paris")

    assert dashboard.state.location == london
    assert dashboard.view.summary.title == "London, United Kingdom"


# --- karttatila ------------------------------------------------------------------


def test_mode_change_only_resamples(api, dashboard):
    dashboard.submit("Paris")
    before = list(dashboard.state.samples)
    calls_before = len(api.calls)
    summary = dashboard.view.summary

    dashboard.set_mode(OverlayMode.WIND)

    assert len(api.calls) == calls_before
    assert dashboard.state.mode is OverlayMode.WIND
    assert dashboard.view.overlay.mode is OverlayMode.WIND
    assert dashboard.view.overlay.zmax == 10.0
    assert dashboard.state.samples != before
    assert all(0.0 <= s.intensity <= 10.0 for s in dashboard.state.samples)
    assert dashboard.view.overlay.center == Coordinate(48.85341, 2.3488)
    assert dashboard.view.summary is summary


def test_mode_change_calls_sampler_not_fetch(monkeypatch, dashboard):
    calls = {"sample": 0}

    def no_fetch(*a, **k):
        raise AssertionError("mode change must not fetch")

    real_sampler = wd.sample_overlay

    def counting_sampler(*a, **k):
        calls["sample"] += 1
        return real_sampler(*a, **k)

    monkeypatch.setattr(wd, "fetch_forecast", no_fetch)
    monkeypatch.setattr(wd, "resolve_by_name", no_fetch)
    monkeypatch.setattr(wd, "sample_overlay", counting_sampler)

    dashboard.set_mode("precipitation")

    assert calls["sample"] == 1
    assert dashboard.state.mode is OverlayMode.PRECIPITATION
    assert all(0.0 <= s.intensity <= 5.0 for s in dashboard.state.samples)


def test_mode_change_after_failure_keeps_error(api, dashboard):
    dashboard.submit("Xyzzyville")
    dashboard.set_mode(OverlayMode.WIND)

    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.view.summary_notice.kind == "error"
    assert dashboard.view.overlay.mode is OverlayMode.WIND


# --- sijainti ---------------------------------------------------------------------


def test_locate_with_unnamed_place_uses_sentinel(api, dashboard):
    coord = Coordinate(45.0, 5.0)

    dashboard.locate(lambda: coord)

    assert dashboard.state.status is DashboardStatus.DISPLAYED
    assert dashboard.state.location.name == "Your Location"
    assert dashboard.view.summary.title == "Your Location"
    assert dashboard.state.center == coord
    assert len(dashboard.view.forecast) == 5
    geo_params = api.calls[0][1]
    assert geo_params == {"latitude": 45.0, "longitude": 5.0, "count": 1}


def test_locate_reverse_lookup_network_failure_still_displays(monkeypatch, dashboard):
    def down(coord):
        raise NetworkFailure("dns")

    monkeypatch.setattr(wd, "resolve_by_coordinate", down)
    monkeypatch.setattr(wd, "fetch_forecast", lambda c: _forecast())

    dashboard.locate(lambda: Coordinate(1.0, 2.0))

    assert dashboard.state.status is DashboardStatus.DISPLAYED
    assert dashboard.state.location.name == "Your Location"
    assert dashboard.state.location.country == ""


def test_locate_unavailable_fails_without_network(api, dashboard):
    def denied():
        raise GeolocationUnavailable("denied", user_message="Error getting location: denied")

    dashboard.locate(denied)

    assert api.calls == []
    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.view.summary_notice.text == "Error getting location: denied"


def test_locate_fetch_failure(monkeypatch, dashboard):
    here = ResolvedLocation(Coordinate(1.0, 2.0), "Here", "")
    monkeypatch.setattr(wd, "resolve_by_coordinate", lambda c: here)

    def down(coord):
        raise NetworkFailure("502")

    monkeypatch.setattr(wd, "fetch_forecast", down)

    dashboard.locate(lambda: Coordinate(1.0, 2.0))

    assert dashboard.state.status is DashboardStatus.FAILED
    assert dashboard.state.location is None


# --- poikkeavat arvot -------------------------------------------------------------


def test_infinite_wind_direction_is_shown_as_missing(api, dashboard):
    api.current_overrides = {"wind_direction_10m": float("inf")}

    dashboard.submit("Paris")

    assert dashboard.state.status is DashboardStatus.DISPLAYED
    assert dashboard.view.summary.wind_direction == MISSING
    assert dashboard.view.summary.wind_speed == "11.2 km/h"


def test_view_building_error_fails_instead_of_hanging(monkeypatch, dashboard):
    paris = ResolvedLocation(Coordinate(48.85, 2.35), "Paris", "France")
    broken = Forecast(
        current=CurrentConditions(
            temperature_c=5.0,
            feels_like_c=3.0,
            humidity_pct=70,
            wind_speed_kmh=8.0,
            wind_direction_deg=float("nan"),
            condition_code=0,
        ),
        daily=[],
    )
    monkeypatch.setattr(wd, "resolve_by_name", lambda q: paris)
    monkeypatch.setattr(wd, "fetch_forecast", lambda c: broken)

    dashboard.submit("Paris")

    state = dashboard.state
    assert state.status is DashboardStatus.FAILED
    assert dashboard.view.summary_notice.text == "Error fetching weather data. Please try again."
    # puolivalmista tulosta ei tallenneta
    assert state.location is None
    assert state.forecast is None
    assert state.center == Coordinate(51.5074, -0.1278)
