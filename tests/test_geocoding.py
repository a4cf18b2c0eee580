# tests/test_geocoding.py
from __future__ import annotations

import pytest

import src.api.geocoding as geo
from src.api.errors import EmptyQuery, NetworkFailure, NotFound
from src.api.weather_models import Coordinate

PARIS = {
    "results": [
        {"latitude": 48.85341, "longitude": 2.3488, "name": "Paris", "country": "France"},
        {"latitude": 33.66094, "longitude": -95.55551, "name": "Paris", "country": "United States"},
    ]
}


def _fake_get(payload, calls):
    def fake(url, params=None, **kw):
        calls.append((url, params))
        return payload

    return fake


def test_resolve_by_name_returns_first_match(monkeypatch):
    calls: list = []
    monkeypatch.setattr(geo, "http_get_json", _fake_get(PARIS, calls))

    loc = geo.resolve_by_name("  Paris ")

    assert loc.name == "Paris"
    assert loc.country == "France"
    assert loc.coordinate == Coordinate(48.85341, 2.3488)
    assert loc.label == "Paris, France"
    # haetaan vain paras osuma, trimmattu nimi
    assert calls == [(geo.GEOCODING_API_URL, {"name": "Paris", "count": 1})]


@pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
def test_resolve_by_name_blank_raises_before_network(monkeypatch, query):
    def no_network(*a, **k):
        raise AssertionError("network must not be called")

    monkeypatch.setattr(geo, "http_get_json", no_network)

    with pytest.raises(EmptyQuery):
        geo.resolve_by_name(query)


@pytest.mark.parametrize("payload", [{}, {"results": []}, {"results": None}, {"generationtime_ms": 0.5}])
def test_resolve_by_name_no_results_raises_not_found(monkeypatch, payload):
    monkeypatch.setattr(geo, "http_get_json", lambda *a, **k: payload)

    with pytest.raises(NotFound) as exc:
        geo.resolve_by_name("Xyzzyville")
    assert exc.value.user_message == "City not found. Please try another city."


def test_resolve_by_name_missing_country_is_empty(monkeypatch):
    payload = {"results": [{"latitude": 10.0, "longitude": 20.0, "name": "Nowhere"}]}
    monkeypatch.setattr(geo, "http_get_json", lambda *a, **k: payload)

    loc = geo.resolve_by_name("Nowhere")
    assert loc.country == ""
    assert loc.label == "Nowhere"


def test_resolve_by_name_propagates_network_failure(monkeypatch):
    def down(*a, **k):
        raise NetworkFailure("connection refused")

    monkeypatch.setattr(geo, "http_get_json", down)

    with pytest.raises(NetworkFailure):
        geo.resolve_by_name("Paris")


def test_resolve_by_coordinate_uses_reverse_params(monkeypatch):
    calls: list = []
    payload = {"results": [{"latitude": 60.0, "longitude": 25.0, "name": "Helsinki", "country": "Finland"}]}
    monkeypatch.setattr(geo, "http_get_json", _fake_get(payload, calls))

    coord = Coordinate(60.17, 24.94)
    loc = geo.resolve_by_coordinate(coord)

    assert loc.name == "Helsinki"
    assert loc.country == "Finland"
    # laitteen koordinaatti säilyy
    assert loc.coordinate == coord
    assert calls[0][1] == {"latitude": 60.17, "longitude": 24.94, "count": 1}


@pytest.mark.parametrize("payload", [{}, {"results": []}, {"results": [{"country": "Finland"}]}])
def test_resolve_by_coordinate_without_name_falls_back(monkeypatch, payload):
    monkeypatch.setattr(geo, "http_get_json", lambda *a, **k: payload)

    coord = Coordinate(1.0, 2.0)
    loc = geo.resolve_by_coordinate(coord)

    assert loc.name == "Your Location"
    assert loc.country == ""
    assert loc.coordinate == coord
