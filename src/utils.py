# src/utils.py
"""General-purpose helpers for the weather dashboard."""

import logging

import streamlit as st

from src.config import DEV

logger = logging.getLogger("weatherdashboard")


def report_error(ctx: str, e: Exception) -> None:
    """Log errors and, in DEV mode, display them in the Streamlit UI."""
    logger.error("%s: %s: %s", ctx, type(e).__name__, e)
    if DEV:
        st.caption(f"⚠ {ctx}: {type(e).__name__}: {e}")
