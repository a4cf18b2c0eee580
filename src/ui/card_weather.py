# src/ui/card_weather.py
from __future__ import annotations

import html

import streamlit as st
from streamlit.components.v1 import html as st_html

from src.api.geolocation import GEO_PARAM_KEYS, has_geolocation_params, query_params_provider
from src.api.weather_viewmodel import ForecastCard, SummaryView
from src.config import DEFAULT_QUERY
from src.ui.common import card, notice_html, section_title
from src.viewmodels.weather_dashboard import LOADING_SUMMARY, DashboardView, WeatherDashboard

SESSION_KEY = "weather_dashboard"

# Selain hakee sijainnin ja lataa sivun uudelleen ?lat=..&lon=.. -parametreilla.
GEOLOCATE_HTML = """
<!doctype html>
<html><head><meta charset="utf-8">
<style>
  html,body {margin:0;padding:0;background:transparent;}
  button {width:100%;padding:8px 10px;border-radius:8px;cursor:pointer;
          border:1px solid rgba(255,255,255,.18);background:rgba(255,255,255,0.10);
          color:#e7eaee;font-size:.95rem;}
</style></head><body>
<button id="locate">📍 My location</button>
<script>
  function reloadWith(params) {
    const url = new URL(window.parent.location.href);
    ["lat", "lon", "geo_error"].forEach((k) => url.searchParams.delete(k));
    Object.entries(params).forEach(([k, v]) => url.searchParams.set(k, v));
    window.parent.location.href = url.toString();
  }
  document.getElementById("locate").addEventListener("click", () => {
    if (!navigator.geolocation) {
      reloadWith({geo_error: "unsupported"});
      return;
    }
    navigator.geolocation.getCurrentPosition(
      (pos) => reloadWith({lat: pos.coords.latitude, lon: pos.coords.longitude}),
      (err) => reloadWith({geo_error: err.message || "permission denied"})
    );
  });
</script>
</body></html>
"""


def get_dashboard() -> WeatherDashboard:
    """Session's dashboard, created on first use."""
    dashboard = st.session_state.get(SESSION_KEY)
    if dashboard is None:
        dashboard = WeatherDashboard()
        st.session_state[SESSION_KEY] = dashboard
    return dashboard


def _handle_geolocation(dashboard: WeatherDashboard) -> bool:
    qp = st.query_params
    if not has_geolocation_params(qp):
        return False

    params = {key: qp.get(key) for key in GEO_PARAM_KEYS if key in qp}
    with st.spinner(LOADING_SUMMARY.text):
        dashboard.locate(query_params_provider(params))

    # parametrit pois, ettei sama haku toistu seuraavalla ajolla
    for key in GEO_PARAM_KEYS:
        if key in qp:
            del qp[key]
    return True


def _search_form(dashboard: WeatherDashboard) -> None:
    # st.form: Enter tekstikentässä lähettää haun
    with st.form("city_search", border=False):
        query = st.text_input(
            "City",
            value=DEFAULT_QUERY,
            placeholder="Enter city name...",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button("Search")

    if submitted:
        with st.spinner(LOADING_SUMMARY.text):
            dashboard.submit(query)


def _summary_html(summary: SummaryView) -> str:
    return f"""
        <div class="current-weather">
          <h3>{html.escape(summary.title)}</h3>
          <div class="temperature">{summary.temperature}</div>
          <div class="description">
            <span class="weather-icon" title="{html.escape(summary.description)}">{summary.icon}</span>
            {html.escape(summary.description)}
          </div>
          <div class="weather-info">
            <div class="info-item"><strong>Feels Like</strong> {summary.feels_like}</div>
            <div class="info-item"><strong>Humidity</strong> {summary.humidity}</div>
            <div class="info-item"><strong>Wind Speed</strong> {summary.wind_speed}</div>
            <div class="info-item"><strong>Wind Direction</strong>
              <span class="wind-direction" style="display:inline-block;transform:rotate({summary.wind_rotation_deg}deg)">↑</span>
              {summary.wind_direction}
            </div>
          </div>
        </div>
    """


def _forecast_html(cards: list[ForecastCard]) -> str:
    def cell(fc: ForecastCard) -> str:
        return f"""
            <div class="forecast-card">
              <h4>{fc.day_name}</h4>
              <div class="sub">{fc.date_label}</div>
              <div class="icon" title="{html.escape(fc.description)}">{fc.icon}</div>
              <div class="temp">{fc.temp_range}</div>
              <div class="details">{fc.wind}<br>{fc.precipitation}</div>
            </div>
        """

    return (
        """
        <!doctype html>
        <html><head><meta charset="utf-8">
        <style>
          :root { --fg:#e7eaee; --bg2:rgba(255,255,255,0.06); }
          html,body {margin:0;padding:0;background:transparent;color:var(--fg);
                     font-family:ui-sans-serif,system-ui,-apple-system,Segoe UI,Roboto,Ubuntu;}
          .forecast-row {display:grid;grid-template-columns:repeat(5,minmax(88px,1fr));
                         gap:10px;align-items:stretch;padding:4px 2px;}
          .forecast-card {display:grid;justify-items:center;background:var(--bg2);
                          border-radius:14px;padding:6px;min-height:140px;}
          h4 {margin:4px 0 0;font-size:.95rem;}
          .sub {font-size:.8rem;opacity:.75;}
          .icon {font-size:2rem;margin:4px 0;}
          .temp {font-size:1.05rem;}
          .details {font-size:.8rem;opacity:.85;text-align:center;margin-top:4px;}
        </style></head><body><div class="forecast-row">
        """
        + "".join(cell(c) for c in cards)
        + "</div></body></html>"
    )


def _render_summary(view: DashboardView) -> None:
    if view.summary_notice is not None:
        st.markdown(notice_html(view.summary_notice), unsafe_allow_html=True)
    elif view.summary is not None:
        st.markdown(_summary_html(view.summary), unsafe_allow_html=True)


def _render_forecast(view: DashboardView) -> None:
    if view.forecast_notice is not None:
        st.markdown(notice_html(view.forecast_notice), unsafe_allow_html=True)
    elif view.forecast:
        st_html(_forecast_html(view.forecast), height=175, scrolling=False)


def card_weather() -> None:
    """Search bar, current conditions and the 5-day forecast."""
    try:
        dashboard = get_dashboard()

        section_title("🌤️ Weather Dashboard", mb=4)
        col_search, col_locate = st.columns([5, 1])
        with col_search:
            _search_form(dashboard)
        with col_locate:
            st_html(GEOLOCATE_HTML, height=44, scrolling=False)

        # ensimmäinen ajo: Lontoo oletuksena, myös kun sivu latautui sijaintinapista
        with st.spinner(LOADING_SUMMARY.text):
            dashboard.start()

        _handle_geolocation(dashboard)

        view = dashboard.view
        _render_summary(view)
        section_title("5-Day Forecast", mt=14, mb=4)
        _render_forecast(view)

    except Exception as e:
        card("Weather", f"<span class='hint'>Error: {html.escape(str(e))}</span>", height_dvh=15)
