# main.py
"""Main entry point for the Weather Dashboard Streamlit application."""

import sys
import traceback

import streamlit as st

from src.logger_config import setup_logging
from src.paths import ensure_dirs
from src.ui import card_map, card_weather
from src.ui.common import load_css

ensure_dirs()

logger = setup_logging()


def main() -> None:
    """Initialize and render the dashboard layout."""
    try:
        st.set_page_config(
            page_title="Weather Dashboard",
            layout="wide",
            page_icon="🌤️",
        )
        load_css("style.css")

        # Row 1: search, current weather and 5-day forecast
        card_weather()

        # Row 2: map overlay
        card_map()

    except KeyboardInterrupt:
        logger.info("Weather Dashboard shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unhandled error: {str(e)}")
        logger.error(traceback.format_exc())
        st.error("Unexpected error, see the log for details.")


if __name__ == "__main__":
    main()
