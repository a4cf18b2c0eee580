# src/ui/card_map.py
from __future__ import annotations

import html

import plotly.graph_objects as go
import streamlit as st

from src.api.overlay import OVERLAY_STYLES, OverlayMode
from src.api.weather_viewmodel import OverlayView
from src.config import MAP_HEIGHT_PX, MAP_STYLE, PLOTLY_CONFIG
from src.ui.card_weather import get_dashboard
from src.ui.common import card, section_title

MODE_KEY = "overlay_mode"


def build_overlay_figure(view: OverlayView, height: int = MAP_HEIGHT_PX) -> go.Figure:
    """Density map of the overlay samples, centered on the current location."""
    frame = view.to_frame()
    fig = go.Figure(
        go.Densitymap(
            lat=frame["lat"],
            lon=frame["lon"],
            z=frame["intensity"],
            radius=view.radius,
            colorscale=view.colorscale,
            zmin=view.zmin,
            zmax=view.zmax,
            showscale=False,
            hovertemplate="%{z:.1f}<extra></extra>",
        )
    )
    fig.update_layout(
        map=dict(
            style=MAP_STYLE,
            center=dict(lat=view.center.latitude, lon=view.center.longitude),
            zoom=view.zoom,
        ),
        margin=dict(l=0, r=0, t=0, b=0),
        height=height,
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _mode_label(mode: OverlayMode) -> str:
    return OVERLAY_STYLES[mode].label


def card_map() -> None:
    """Map with the sample overlay and the mode buttons."""
    try:
        dashboard = get_dashboard()
        modes = list(OverlayMode)

        section_title("🗺️ Weather Map", mt=14, mb=4)
        selected = st.radio(
            "Overlay",
            modes,
            index=modes.index(dashboard.state.mode),
            format_func=_mode_label,
            horizontal=True,
            label_visibility="collapsed",
            key=MODE_KEY,
        )
        if selected != dashboard.state.mode:
            dashboard.set_mode(selected)

        view = dashboard.view.overlay
        if view is None:
            card("Weather Map", "<span class='hint'>No map data yet</span>", height_dvh=20)
            return

        fig = build_overlay_figure(view)
        st.plotly_chart(fig, use_container_width=True, theme=None, config=PLOTLY_CONFIG)
        st.markdown(
            f"<div class='hint'>{html.escape(view.label)}: sample data around "
            f"{view.center.latitude:.4f}, {view.center.longitude:.4f}</div>",
            unsafe_allow_html=True,
        )
    except Exception as e:
        section_title("Weather Map")
        st.markdown(
            f"<span class='hint'>Map error: {html.escape(str(e))}</span>", unsafe_allow_html=True
        )
