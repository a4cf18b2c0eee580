# src/api/geocoding.py
"""Open-Meteo geocoding: place name → coordinates, and the reverse."""

from __future__ import annotations

import logging
from typing import Any

from src.api.errors import EmptyQuery, NotFound
from src.api.http import http_get_json
from src.api.weather_models import Coordinate, ResolvedLocation
from src.api.weather_utils import as_float, as_str
from src.config import GEOCODING_API_URL, UNKNOWN_PLACE_NAME

logger = logging.getLogger("weatherdashboard")


def _first_result(data: dict[str, Any]) -> dict[str, Any] | None:
    results = data.get("results") or []
    if not isinstance(results, list) or not results:
        return None
    first = results[0]
    return first if isinstance(first, dict) else None


def resolve_by_name(query: str) -> ResolvedLocation:
    """
    Resolve a free-text city name to the single best match.

    Raises EmptyQuery for blank input (before any request) and NotFound when
    the API has no match.
    """
    name = (query or "").strip()
    if not name:
        raise EmptyQuery("blank search query")

    data = http_get_json(GEOCODING_API_URL, params={"name": name, "count": 1})
    best = _first_result(data)
    if best is None:
        raise NotFound(f"no geocoding match for {name!r}")

    lat = as_float(best.get("latitude"))
    lon = as_float(best.get("longitude"))
    if lat is None or lon is None:
        raise NotFound(f"geocoding match for {name!r} has no coordinates")

    location = ResolvedLocation(
        coordinate=Coordinate(lat, lon),
        name=as_str(best.get("name")) or name,
        country=as_str(best.get("country")) or "",
    )
    logger.info("Resolved %r -> %s (%.4f, %.4f)", name, location.label, lat, lon)
    return location


def resolve_by_coordinate(coord: Coordinate) -> ResolvedLocation:
    """
    Reverse lookup for a device location.

    A missing place name is not an error: the location is labelled
    "Your Location" with an empty country and keeps the given coordinate.
    """
    data = http_get_json(
        GEOCODING_API_URL,
        params={"latitude": coord.latitude, "longitude": coord.longitude, "count": 1},
    )
    best = _first_result(data) or {}
    name = as_str(best.get("name"))
    if not name:
        logger.info(
            "No place name for (%.4f, %.4f), using %r",
            coord.latitude,
            coord.longitude,
            UNKNOWN_PLACE_NAME,
        )
        return ResolvedLocation(coordinate=coord, name=UNKNOWN_PLACE_NAME, country="")

    return ResolvedLocation(
        coordinate=coord,
        name=name,
        country=as_str(best.get("country")) or "",
    )
