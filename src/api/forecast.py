# src/api/forecast.py
from __future__ import annotations

import logging
from typing import Any

from src.api.errors import NoCurrentData
from src.api.http import http_get_json
from src.api.weather_models import (
    Coordinate,
    CurrentConditions,
    DailyForecastEntry,
    Forecast,
)
from src.api.weather_utils import as_float, as_int, parse_day, value_at
from src.config import CURRENT_FIELDS, DAILY_FIELDS, FORECAST_DAYS, WEATHER_API_URL

logger = logging.getLogger("weatherdashboard")


def fetch_raw_forecast(coord: Coordinate) -> dict[str, Any]:
    """Fetch current + daily data from Open-Meteo as raw JSON."""
    params = {
        "latitude": coord.latitude,
        "longitude": coord.longitude,
        "current": ",".join(CURRENT_FIELDS),
        "daily": ",".join(DAILY_FIELDS),
        "timezone": "auto",
        "forecast_days": FORECAST_DAYS,
    }
    return http_get_json(WEATHER_API_URL, params=params)


def _parse_current(current: dict[str, Any]) -> CurrentConditions:
    direction = as_float(current.get("wind_direction_10m"))
    return CurrentConditions(
        temperature_c=as_float(current.get("temperature_2m")),
        feels_like_c=as_float(current.get("apparent_temperature")),
        humidity_pct=as_int(current.get("relative_humidity_2m")),
        wind_speed_kmh=as_float(current.get("wind_speed_10m")),
        wind_direction_deg=None if direction is None else direction % 360.0,
        condition_code=as_int(current.get("weather_code")),
        precipitation_mm=as_float(current.get("precipitation")),
        rain_mm=as_float(current.get("rain")),
        showers_mm=as_float(current.get("showers")),
        snowfall_cm=as_float(current.get("snowfall")),
    )


def _parse_daily(daily: dict[str, Any]) -> list[DailyForecastEntry]:
    """
    Zip Open-Meteo's parallel daily arrays into one entry per day.

    The ``time`` array decides how many days there are. A day with an
    unreadable date keeps its index with ``date=None``, so index 0 stays today.
    Missing values in the other arrays become None.
    """
    times: list[Any] = daily.get("time") or []

    entries: list[DailyForecastEntry] = []
    for idx, raw_day in enumerate(times):
        day = parse_day(raw_day)
        if day is None:
            logger.warning("Daily entry %s has a bad date %r", idx, raw_day)

        entries.append(
            DailyForecastEntry(
                date=day,
                max_temp_c=as_float(value_at(daily.get("temperature_2m_max"), idx)),
                min_temp_c=as_float(value_at(daily.get("temperature_2m_min"), idx)),
                condition_code=as_int(value_at(daily.get("weather_code"), idx)),
                wind_speed_max_kmh=as_float(value_at(daily.get("wind_speed_10m_max"), idx)),
                precipitation_sum_mm=as_float(value_at(daily.get("precipitation_sum"), idx)),
                wind_direction_dominant_deg=as_float(
                    value_at(daily.get("wind_direction_10m_dominant"), idx)
                ),
            )
        )
    return entries


def fetch_forecast(coord: Coordinate) -> Forecast:
    """
    Current conditions and the daily forecast for ``coord``.

    Raises NoCurrentData when the response lacks the ``current`` block,
    even though the request itself succeeded.
    """
    data = fetch_raw_forecast(coord)

    current = data.get("current")
    if not isinstance(current, dict) or not current:
        raise NoCurrentData(
            f"no current block for ({coord.latitude:.4f}, {coord.longitude:.4f})"
        )

    daily = data.get("daily") or {}
    forecast = Forecast(
        current=_parse_current(current),
        daily=_parse_daily(daily if isinstance(daily, dict) else {}),
    )
    logger.info(
        "Fetched forecast for (%.4f, %.4f): %s daily entries",
        coord.latitude,
        coord.longitude,
        len(forecast.daily),
    )
    return forecast
