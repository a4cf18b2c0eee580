# src/api/wind.py
from __future__ import annotations

import math
from typing import Final

COMPASS_LABELS: Final[tuple[str, ...]] = (
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
)  # fmt: skip

SECTOR_DEG: Final[float] = 360.0 / len(COMPASS_LABELS)


def wind_direction_label(degrees: float) -> str:
    """
    Wind bearing → 16-point compass label.

    Sectors are 22.5° wide and centered on N = 0°. Halfway values round up
    (11.25° → NNE) and 360° wraps back to N. Any real input is accepted.
    """
    normalized = float(degrees) % 360.0
    index = math.floor(normalized / SECTOR_DEG + 0.5) % len(COMPASS_LABELS)
    return COMPASS_LABELS[index]
