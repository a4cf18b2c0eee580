# src/api/geolocation.py
"""
Device location handed over by the browser.

The "My location" button runs navigator.geolocation in the page and reloads
the dashboard with ``?lat=..&lon=..`` or ``?geo_error=..``. These helpers turn
those query parameters back into a Coordinate or a GeolocationUnavailable.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from src.api.errors import GeolocationUnavailable
from src.api.weather_models import Coordinate
from src.api.weather_utils import as_float

GEO_PARAM_KEYS: tuple[str, ...] = ("lat", "lon", "geo_error")
UNSUPPORTED = "unsupported"

GeolocationProvider = Callable[[], Coordinate]


def has_geolocation_params(query_params: Mapping[str, Any]) -> bool:
    return "geo_error" in query_params or ("lat" in query_params and "lon" in query_params)


def geolocation_from_query_params(query_params: Mapping[str, Any]) -> Coordinate:
    """Coordinate from the browser reload, or GeolocationUnavailable."""
    error = query_params.get("geo_error")
    if error is not None:
        reason = str(error).strip()
        if not reason or reason == UNSUPPORTED:
            raise GeolocationUnavailable("geolocation API missing")
        raise GeolocationUnavailable(reason, user_message=f"Error getting location: {reason}")

    lat = as_float(query_params.get("lat"))
    lon = as_float(query_params.get("lon"))
    if lat is None or lon is None:
        raise GeolocationUnavailable("no coordinates in request")

    try:
        return Coordinate(lat, lon)
    except ValueError as e:
        raise GeolocationUnavailable(
            str(e), user_message=f"Error getting location: {e}"
        ) from e


def query_params_provider(query_params: Mapping[str, Any]) -> GeolocationProvider:
    """Wrap the query parameters as a zero-argument location provider."""
    return lambda: geolocation_from_query_params(query_params)
