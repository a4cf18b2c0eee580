from __future__ import annotations

import math
from datetime import date
from typing import Any

import pandas as pd


def _cast_to_float(value: Any) -> float | None:
    """Convert to float, or None when the value has no finite numeric reading."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")

    try:
        as_f = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    # NaN ja ±inf (json hyväksyy "Infinity") → puuttuva arvo
    return as_f if math.isfinite(as_f) else None


def _cast_to_int(value: Any) -> int | None:
    """Convert to int (via float, so "3.0" works), or None."""
    as_f = _cast_to_float(value)
    return None if as_f is None else int(as_f)


def _normalize_scalar(value: Any) -> Any | None:
    """
    Common preprocessing for API values:
    - None → None
    - pandas NA / NaN → None
    - numpy scalar → .item()
    """
    if value is None:
        return None

    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        # pd.isna ei osaa kaikkia tyyppejä (esim. listat)
        pass

    if hasattr(value, "item"):
        value = value.item()

    return value


def safe_cast(value: Any, type_: type) -> Any | None:
    """
    Lenient conversion for values read from the weather JSON.

    Returns None when the value is missing or cannot be converted; the
    dashboard shows a dash for those instead of failing the whole lookup.
    """
    value = _normalize_scalar(value)
    if value is None:
        return None

    if type_ is float:
        return _cast_to_float(value)
    if type_ is int:
        return _cast_to_int(value)
    if type_ is str:
        return str(value)
    return type_(value)


def as_int(x: Any) -> int | None:
    return safe_cast(x, int)


def as_float(x: Any) -> float | None:
    return safe_cast(x, float)


def as_str(x: Any) -> str | None:
    return safe_cast(x, str)


def value_at(values: list[Any] | None, idx: int) -> Any | None:
    """Item ``idx`` of an Open-Meteo parallel array, None past the end."""
    if not values or idx >= len(values):
        return None
    return values[idx]


def parse_day(value: Any) -> date | None:
    """Parse an ISO date ("2025-11-11") from the daily ``time`` array."""
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None
