# src/viewmodels/weather_dashboard.py
"""
Weather dashboard orchestration.

One ``WeatherDashboard`` per browser session (kept in st.session_state). It
runs the lookup pipeline, geocoding → forecast → overlay, and keeps the
render instructions (``DashboardView``) that the Streamlit cards draw.
Nothing here touches Streamlit, so the whole flow is testable without a UI.

State machine:  IDLE → LOADING → DISPLAYED | FAILED
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from src.api.errors import (
    EmptyQuery,
    GeolocationUnavailable,
    NetworkFailure,
    WeatherLookupError,
)
from src.api.forecast import fetch_forecast
from src.api.geocoding import resolve_by_coordinate, resolve_by_name
from src.api.geolocation import GeolocationProvider
from src.api.overlay import OverlayMode, OverlaySample, sample_overlay
from src.api.weather_models import Coordinate, Forecast, ResolvedLocation
from src.api.weather_viewmodel import (
    ForecastCard,
    OverlayView,
    SummaryView,
    build_forecast_cards,
    build_overlay_view,
    build_summary_view,
)
from src.config import DEFAULT_LAT, DEFAULT_LON, DEFAULT_QUERY, UNKNOWN_PLACE_NAME

logger = logging.getLogger("weatherdashboard")


class DashboardStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYED = "displayed"
    FAILED = "failed"


@dataclass(frozen=True)
class Notice:
    """Placeholder text shown instead of a region's content."""

    kind: str  # "loading" / "error"
    text: str


LOADING_SUMMARY = Notice("loading", "Loading weather data...")
LOADING_FORECAST = Notice("loading", "Loading forecast...")


@dataclass
class DashboardView:
    """Render instructions for the UI.

    A region shows its notice when one is set, otherwise its content.
    """

    summary: SummaryView | None = None
    summary_notice: Notice | None = None
    forecast: list[ForecastCard] | None = None
    forecast_notice: Notice | None = None
    overlay: OverlayView | None = None


def _default_center() -> Coordinate:
    return Coordinate(DEFAULT_LAT, DEFAULT_LON)


@dataclass
class SessionState:
    center: Coordinate = field(default_factory=_default_center)
    location: ResolvedLocation | None = None
    forecast: Forecast | None = None
    mode: OverlayMode = OverlayMode.TEMPERATURE
    samples: list[OverlaySample] = field(default_factory=list)
    status: DashboardStatus = DashboardStatus.IDLE
    error: str | None = None
    view: DashboardView = field(default_factory=DashboardView)
    # kasvaa jokaisella haulla; vanhemman haun tulos hylätään
    generation: int = 0
    started: bool = False


class WeatherDashboard:
    def __init__(self, state: SessionState | None = None, rng: random.Random | None = None) -> None:
        self.state = state or SessionState()
        self._rng = rng or random.Random()

    @property
    def view(self) -> DashboardView:
        return self.state.view

    # --- entry points ------------------------------------------------------------
    def start(self, query: str = DEFAULT_QUERY) -> None:
        """Draw the default overlay and run the first search. Only once per session.

        A failed device lookup before startup does not count: the dashboard
        still gets the default city. A successful one is kept as is.
        """
        state = self.state
        if state.started:
            return
        state.started = True
        if state.location is not None:
            return
        state.center = _default_center()
        self._regenerate_overlay()
        self.submit(query)

    def submit(self, query: str) -> None:
        """Search by city name (search button or Enter)."""
        name = (query or "").strip()
        if not name:
            # ei latausnäkymää, ei verkkokutsua
            self._fail(self._next_generation(), EmptyQuery("blank search query"))
            return

        generation = self._begin_loading()
        try:
            location = resolve_by_name(name)
            forecast = fetch_forecast(location.coordinate)
            self._display(generation, location, forecast)
        except WeatherLookupError as e:
            self._fail(generation, e)
        except Exception as e:
            logger.exception("Unexpected error while looking up %r", name)
            self._fail(generation, WeatherLookupError(str(e)))

    def locate(self, provider: GeolocationProvider) -> None:
        """Look up the weather for the device location."""
        try:
            coord = provider()
        except GeolocationUnavailable as e:
            self._fail(self._next_generation(), e)
            return

        generation = self._begin_loading()
        try:
            location = self._reverse_lookup(coord)
            forecast = fetch_forecast(coord)
            self._display(generation, location, forecast)
        except WeatherLookupError as e:
            self._fail(generation, e)
        except Exception as e:
            logger.exception("Unexpected error while fetching weather for %s", coord)
            self._fail(generation, WeatherLookupError(str(e)))

    def set_mode(self, mode: OverlayMode | str) -> None:
        """Switch the overlay mode. Resamples at the current center, no fetch."""
        self.state.mode = OverlayMode(mode)
        self._regenerate_overlay()

    def _reverse_lookup(self, coord: Coordinate) -> ResolvedLocation:
        try:
            return resolve_by_coordinate(coord)
        except NetworkFailure as e:
            # paikannimi ei ole välttämätön, sää haetaan silti
            logger.warning("Reverse geocoding failed, using %r: %s", UNKNOWN_PLACE_NAME, e)
            return ResolvedLocation(coordinate=coord, name=UNKNOWN_PLACE_NAME, country="")

    # --- transitions -------------------------------------------------------------
    def _next_generation(self) -> int:
        self.state.generation += 1
        return self.state.generation

    def _is_current(self, generation: int) -> bool:
        if generation != self.state.generation:
            logger.info(
                "Dropping result of lookup %s, lookup %s is newer",
                generation,
                self.state.generation,
            )
            return False
        return True

    def _begin_loading(self) -> int:
        generation = self._next_generation()
        self.state.status = DashboardStatus.LOADING
        self.state.error = None
        view = self.view
        view.summary = None
        view.summary_notice = LOADING_SUMMARY
        # vanhat kortit jäävät talteen, jos haku epäonnistuu
        view.forecast_notice = LOADING_FORECAST
        return generation

    def _display(self, generation: int, location: ResolvedLocation, forecast: Forecast) -> None:
        if not self._is_current(generation):
            return

        # näkymä ensin: jos rakentaminen kaatuu, tilaan ei ole koskettu
        summary = build_summary_view(location, forecast.current)
        cards = build_forecast_cards(forecast.daily)

        state = self.state
        state.location = location
        state.forecast = forecast
        state.center = location.coordinate
        state.status = DashboardStatus.DISPLAYED
        state.error = None

        view = self.view
        view.summary = summary
        view.summary_notice = None
        view.forecast = cards
        view.forecast_notice = None

        self._regenerate_overlay()
        logger.info("Showing weather for %s", location.label)

    def _fail(self, generation: int, error: WeatherLookupError) -> None:
        if not self._is_current(generation):
            return

        logger.warning("Weather lookup failed (%s): %s", type(error).__name__, error)
        self.state.status = DashboardStatus.FAILED
        self.state.error = error.user_message

        view = self.view
        view.summary = None
        view.summary_notice = Notice("error", error.user_message)
        # ennustealue palaa edelliseen sisältöönsä
        view.forecast_notice = None

    def _regenerate_overlay(self) -> None:
        state = self.state
        state.samples = sample_overlay(state.center, state.mode, rng=self._rng)
        self.view.overlay = build_overlay_view(state.center, state.mode, state.samples)
