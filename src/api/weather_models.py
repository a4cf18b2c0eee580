# src/api/weather_models.py
"""Domain types shared by the resolvers, the fetcher and the overlay sampler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True)
class ResolvedLocation:
    """Geocoded place. ``country`` is empty when the API does not know it."""

    coordinate: Coordinate
    name: str
    country: str = ""

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    @property
    def label(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name


@dataclass(frozen=True)
class CurrentConditions:
    temperature_c: float | None
    feels_like_c: float | None
    humidity_pct: int | None
    wind_speed_kmh: float | None
    wind_direction_deg: float | None
    condition_code: int | None
    precipitation_mm: float | None = None
    rain_mm: float | None = None
    showers_mm: float | None = None
    snowfall_cm: float | None = None


@dataclass(frozen=True)
class DailyForecastEntry:
    date: date | None  # None: unreadable date in the response
    max_temp_c: float | None
    min_temp_c: float | None
    condition_code: int | None
    wind_speed_max_kmh: float | None
    precipitation_sum_mm: float | None
    wind_direction_dominant_deg: float | None = None


@dataclass(frozen=True)
class Forecast:
    """Current conditions plus one entry per forecast day (index 0 = today)."""

    current: CurrentConditions
    daily: list[DailyForecastEntry]
