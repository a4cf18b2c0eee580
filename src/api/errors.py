# src/api/errors.py
"""Failures of a weather lookup.

Every error carries a ``user_message`` that the dashboard shows in place of
the weather summary. ``str(err)`` keeps the technical detail for the logs.
"""

from __future__ import annotations


class WeatherLookupError(RuntimeError):
    """Base class for failures handled at the dashboard boundary."""

    user_message = "Error fetching weather data. Please try again."

    def __init__(self, detail: str = "", user_message: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class EmptyQuery(WeatherLookupError):
    """Search text was blank after trimming."""

    user_message = "Please enter a city name"


class NotFound(WeatherLookupError):
    """Geocoding returned no results for a name query."""

    user_message = "City not found. Please try another city."


class NoCurrentData(WeatherLookupError):
    """Weather API answered but without a ``current`` block."""


class NetworkFailure(WeatherLookupError):
    """Transport-level failure (connection, HTTP status, unreadable JSON)."""


class NetworkTimeout(NetworkFailure):
    """The request did not complete within HTTP_TIMEOUT_S."""

    user_message = "The weather service did not respond in time. Please try again."


class GeolocationUnavailable(WeatherLookupError):
    """Device location is missing, denied or not supported."""

    user_message = "Geolocation is not supported by this browser."
