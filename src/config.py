# config.py
"""Configuration settings for the weather dashboard."""

import os

HTTP_TIMEOUT_S: float = float(os.environ.get("HTTP_TIMEOUT_S", "8.0"))
"""Timeout (seconds) for every outbound geocoding / weather request."""

DEV: bool = os.environ.get("DEV", "0") == "1"

# ------------------- EXTERNAL APIS -------------------

WEATHER_API_URL: str = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
GEOCODING_API_URL: str = os.getenv(
    "GEOCODING_API_URL", "https://geocoding-api.open-meteo.com/v1/search"
)
USER_AGENT: str = "WeatherDashboard/1.0"

# ------------------- DEFAULT LOCATION -------------------

DEFAULT_LAT: float = float(os.getenv("DEFAULT_LAT", "51.5074"))
DEFAULT_LON: float = float(os.getenv("DEFAULT_LON", "-0.1278"))
"""London coordinates, used as the map center before the first lookup."""

DEFAULT_QUERY: str = os.getenv("DEFAULT_QUERY", "London")
"""City searched automatically at startup so the dashboard is never empty."""

UNKNOWN_PLACE_NAME: str = "Your Location"
"""Label used when reverse geocoding gives no place name."""

# ------------------- FORECAST -------------------

FORECAST_DAYS: int = 6
"""Days requested from the API (today + 5)."""

FORECAST_CARD_COUNT: int = 5
"""Forecast cards rendered; index 0 (today) is skipped."""

CURRENT_FIELDS: tuple[str, ...] = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
)

DAILY_FIELDS: tuple[str, ...] = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "wind_speed_10m_max",
    "wind_direction_10m_dominant",
)

# ------------------- MAP OVERLAY -------------------

OVERLAY_SAMPLE_COUNT: int = 50
OVERLAY_JITTER_DEG: float = 0.1
"""Samples are spread ±0.1° around the map center in both axes."""

MAP_ZOOM: int = 10
MAP_HEIGHT_PX: int = 420
MAP_STYLE: str = "open-street-map"

# ------------------- UI -------------------

COLOR_TEXT_GRAY: str = "#d0d0d0"
COLOR_ERROR: str = "#ff6666"

PLOTLY_CONFIG: dict = {
    "displayModeBar": False,
    "responsive": True,
}
