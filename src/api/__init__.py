# src/api/__init__.py
from .errors import (
    EmptyQuery as EmptyQuery,
    GeolocationUnavailable as GeolocationUnavailable,
    NetworkFailure as NetworkFailure,
    NetworkTimeout as NetworkTimeout,
    NoCurrentData as NoCurrentData,
    NotFound as NotFound,
    WeatherLookupError as WeatherLookupError,
)
from .forecast import fetch_forecast as fetch_forecast
from .geocoding import resolve_by_coordinate as resolve_by_coordinate, resolve_by_name as resolve_by_name
from .overlay import OverlayMode as OverlayMode, sample_overlay as sample_overlay
from .wind import wind_direction_label as wind_direction_label
from .wmo_catalog import describe as describe
