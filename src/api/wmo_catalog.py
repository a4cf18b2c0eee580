# src/api/wmo_catalog.py
from __future__ import annotations

from typing import Final, NamedTuple


class WeatherInfo(NamedTuple):
    description: str
    icon: str


UNKNOWN: Final[WeatherInfo] = WeatherInfo("Unknown", "❓")

# WMO-koodi → (kuvaus, ikoni)
_INFO_BY_WMO: Final[dict[int, WeatherInfo]] = {
    0: WeatherInfo("Clear sky", "☀️"),
    1: WeatherInfo("Mainly clear", "🌤️"),
    2: WeatherInfo("Partly cloudy", "⛅"),
    3: WeatherInfo("Overcast", "☁️"),
    45: WeatherInfo("Fog", "🌫️"),
    48: WeatherInfo("Depositing rime fog", "🌫️"),
    51: WeatherInfo("Light drizzle", "🌦️"),
    53: WeatherInfo("Moderate drizzle", "🌦️"),
    55: WeatherInfo("Dense drizzle", "🌦️"),
    61: WeatherInfo("Slight rain", "🌧️"),
    63: WeatherInfo("Moderate rain", "🌧️"),
    65: WeatherInfo("Heavy rain", "⛈️"),
    80: WeatherInfo("Slight rain showers", "🌦️"),
    81: WeatherInfo("Moderate rain showers", "🌧️"),
    82: WeatherInfo("Violent rain showers", "⛈️"),
    95: WeatherInfo("Thunderstorm", "⛈️"),
    96: WeatherInfo("Thunderstorm with hail", "⛈️"),
}


def describe(code: int | None) -> WeatherInfo:
    """
    WMO condition code → description and emoji icon.
    Unknown codes (and None) give the "Unknown" sentinel, never an error.
    """
    if code is None:
        return UNKNOWN
    return _INFO_BY_WMO.get(code, UNKNOWN)
