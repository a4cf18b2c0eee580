# src/api/overlay.py
"""
Synthetic map overlay.

The points drawn on the map are random samples around the map center, not
measurements. They only suggest what a temperature / wind / precipitation
field could look like. Each mode has its own intensity range and gradient.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Final

from src.api.weather_models import Coordinate
from src.config import OVERLAY_JITTER_DEG, OVERLAY_SAMPLE_COUNT


class OverlayMode(str, Enum):
    TEMPERATURE = "temperature"
    WIND = "wind"
    PRECIPITATION = "precipitation"


@dataclass(frozen=True)
class OverlaySample:
    latitude: float
    longitude: float
    intensity: float


@dataclass(frozen=True)
class OverlayStyle:
    """Intensity range and heatmap gradient for one overlay mode.

    Gradient stop positions are fractions of ``max_value``.
    """

    label: str
    min_value: float
    max_value: float
    radius: int
    blur: int  # Leaflet-heat pehmennys; plotly Densitymap käyttää vain radiusta
    gradient: tuple[tuple[float, str], ...]


OVERLAY_STYLES: Final[dict[OverlayMode, OverlayStyle]] = {
    OverlayMode.TEMPERATURE: OverlayStyle(
        label="🌡️ Temperature",
        min_value=15.0,
        max_value=30.0,
        radius=25,
        blur=15,
        gradient=(
            (0.4, "blue"),
            (0.6, "cyan"),
            (0.7, "lime"),
            (0.8, "yellow"),
            (1.0, "red"),
        ),
    ),
    OverlayMode.WIND: OverlayStyle(
        label="💨 Wind Flow",
        min_value=0.0,
        max_value=10.0,
        radius=20,
        blur=10,
        gradient=(
            (0.4, "rgba(0, 0, 255, 0.4)"),
            (0.6, "rgba(0, 255, 255, 0.6)"),
            (0.8, "rgba(255, 255, 0, 0.8)"),
            (1.0, "rgba(255, 0, 0, 1)"),
        ),
    ),
    OverlayMode.PRECIPITATION: OverlayStyle(
        label="💧 Precipitation",
        min_value=0.0,
        max_value=5.0,
        radius=20,
        blur=10,
        gradient=(
            (0.4, "rgba(0, 0, 255, 0.4)"),
            (0.6, "rgba(0, 255, 0, 0.6)"),
            (0.8, "rgba(255, 255, 0, 0.8)"),
            (1.0, "rgba(255, 0, 0, 1)"),
        ),
    ),
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def sample_overlay(
    center: Coordinate,
    mode: OverlayMode,
    rng: random.Random | None = None,
    count: int = OVERLAY_SAMPLE_COUNT,
) -> list[OverlaySample]:
    """
    Draw ``count`` random samples within ±OVERLAY_JITTER_DEG of ``center``.

    Each call gives a fresh set; callers replace the old set, never merge.
    """
    rnd = rng or random.Random()
    style = OVERLAY_STYLES[mode]
    span = style.max_value - style.min_value

    samples: list[OverlaySample] = []
    for _ in range(count):
        # (r - 0.5) * 2 * jitter → [-jitter, +jitter)
        lat = center.latitude + (rnd.random() - 0.5) * 2 * OVERLAY_JITTER_DEG
        lon = center.longitude + (rnd.random() - 0.5) * 2 * OVERLAY_JITTER_DEG
        samples.append(
            OverlaySample(
                latitude=_clamp(lat, -90.0, 90.0),
                longitude=_clamp(lon, -180.0, 180.0),
                intensity=rnd.random() * span + style.min_value,
            )
        )
    return samples


def overlay_colorscale(mode: OverlayMode) -> list[tuple[float, str]]:
    """
    Plotly colorscale for ``mode``.

    Plotly wants the scale to start at 0.0; below the first gradient stop
    the overlay is transparent.
    """
    stops = list(OVERLAY_STYLES[mode].gradient)
    if stops[0][0] > 0.0:
        stops.insert(0, (0.0, "rgba(0, 0, 0, 0)"))
    return stops
