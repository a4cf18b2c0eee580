# src/ui/common.py
from __future__ import annotations

import html

import streamlit as st

from src.paths import asset_path
from src.viewmodels.weather_dashboard import Notice


def load_css(file_name: str) -> None:
    path = asset_path(file_name)
    if not path.exists():
        return
    with path.open("r", encoding="utf-8") as f:
        st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)


def section_title(html_str: str, mt: int = 10, mb: int = 10) -> None:
    """Section heading; margins in px. ``html_str`` is trusted markup."""
    st.markdown(
        f"<div class='section-title' style='margin:{mt}px 0 {mb}px 0'>{html_str}</div>",
        unsafe_allow_html=True,
    )


def card(title: str, body_html: str, height_dvh: int = 16) -> None:
    """Fallback card for errors and empty states."""
    st.markdown(
        f"""
        <section class="card" style="min-height:{height_dvh}dvh; position:relative; overflow:hidden;">
          <div class="card-title">{html.escape(title)}</div>
          <div class="card-body">{body_html}</div>
        </section>
        """,
        unsafe_allow_html=True,
    )


def notice_html(notice: Notice) -> str:
    """Loading placeholder or error message in place of a region."""
    return f'<div class="{notice.kind}">{html.escape(notice.text)}</div>'
