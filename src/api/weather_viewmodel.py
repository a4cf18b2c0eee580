# src/api/weather_viewmodel.py
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

import pandas as pd

from src.api.overlay import OVERLAY_STYLES, OverlayMode, OverlaySample, overlay_colorscale
from src.api.weather_models import (
    Coordinate,
    CurrentConditions,
    DailyForecastEntry,
    ResolvedLocation,
)
from src.api.wind import wind_direction_label
from src.api.wmo_catalog import describe
from src.config import FORECAST_CARD_COUNT, MAP_ZOOM

MISSING = "—"


@dataclass(frozen=True)
class SummaryView:
    """UI-ready summary of the current conditions."""

    title: str  # "Paris, France"
    temperature: str  # "18°C"
    description: str
    icon: str
    feels_like: str
    humidity: str
    wind_speed: str
    wind_direction: str  # "NNE"
    wind_rotation_deg: float  # arrow rotation


@dataclass(frozen=True)
class ForecastCard:
    day_name: str  # "Tue"
    date_label: str  # "12/11"
    icon: str
    description: str
    temp_range: str  # "14° / 7°"
    wind: str
    precipitation: str


@dataclass(frozen=True)
class OverlayView:
    mode: OverlayMode
    label: str
    center: Coordinate
    zoom: int
    latitudes: list[float]
    longitudes: list[float]
    intensities: list[float]
    colorscale: list[tuple[float, str]]
    zmin: float
    zmax: float
    radius: int

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "lat": self.latitudes,
                "lon": self.longitudes,
                "intensity": self.intensities,
            }
        )


def round_half_up(value: float) -> int:
    """Whole-degree rounding for display; 2.5 → 3 and -2.5 → -2."""
    return math.floor(value + 0.5)


def _fmt_number(value: float | int | None) -> str:
    # native precision, no exponent: 11.2 → "11.2", 10.0 → "10", 1e-05 → "0.00001"
    if value is None:
        return MISSING
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _fmt_degrees(value: float | None, unit: str = "°C") -> str:
    if value is None:
        return MISSING
    return f"{round_half_up(value)}{unit}"


def build_summary_view(location: ResolvedLocation, current: CurrentConditions) -> SummaryView:
    info = describe(current.condition_code)
    direction = current.wind_direction_deg

    return SummaryView(
        title=location.label,
        temperature=_fmt_degrees(current.temperature_c),
        description=info.description,
        icon=info.icon,
        feels_like=_fmt_degrees(current.feels_like_c),
        humidity=MISSING if current.humidity_pct is None else f"{current.humidity_pct}%",
        wind_speed=f"{_fmt_number(current.wind_speed_kmh)} km/h",
        wind_direction=MISSING if direction is None else wind_direction_label(direction),
        wind_rotation_deg=0.0 if direction is None else direction,
    )


def build_forecast_card(entry: DailyForecastEntry) -> ForecastCard:
    info = describe(entry.condition_code)
    day = entry.date
    return ForecastCard(
        day_name=MISSING if day is None else day.strftime("%a"),
        date_label=MISSING if day is None else f"{day.day}/{day.month}",
        icon=info.icon,
        description=info.description,
        temp_range=f"{_fmt_degrees(entry.max_temp_c, '°')} / {_fmt_degrees(entry.min_temp_c, '°')}",
        wind=f"💨 {_fmt_number(entry.wind_speed_max_kmh)} km/h",
        precipitation=f"💧 {_fmt_number(entry.precipitation_sum_mm)}mm",
    )


def build_forecast_cards(
    daily: Sequence[DailyForecastEntry],
    count: int = FORECAST_CARD_COUNT,
) -> list[ForecastCard]:
    """
    Cards for the days after today.

    Index 0 is today and is already covered by the summary, so the cards
    are built from indices 1..count.
    """
    return [build_forecast_card(entry) for entry in daily[1 : 1 + count]]


def build_overlay_view(
    center: Coordinate,
    mode: OverlayMode,
    samples: Sequence[OverlaySample],
    zoom: int = MAP_ZOOM,
) -> OverlayView:
    style = OVERLAY_STYLES[mode]
    return OverlayView(
        mode=mode,
        label=style.label,
        center=center,
        zoom=zoom,
        latitudes=[s.latitude for s in samples],
        longitudes=[s.longitude for s in samples],
        intensities=[s.intensity for s in samples],
        colorscale=overlay_colorscale(mode),
        zmin=0.0,
        zmax=style.max_value,
        radius=style.radius,
    )
