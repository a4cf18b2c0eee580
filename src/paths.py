"""
paths.py – central paths for the weather dashboard.

    from src.paths import ASSETS, LOGS, asset_path

gives the right path whether the app is started from the project root
(streamlit run main.py) or from somewhere else.
"""

from __future__ import annotations

from pathlib import Path

_THIS_FILE = Path(__file__).resolve()

# src/paths.py -> src -> project root
ROOT_DIR = _THIS_FILE.parent.parent

ASSETS = ROOT_DIR / "assets"
LOGS = ROOT_DIR / "logs"


def asset_path(*parts: str) -> Path:
    """Return a path inside the assets folder."""
    return ASSETS.joinpath(*parts)


def ensure_dirs() -> None:
    """Make sure runtime folders (logs/) exist."""
    LOGS.mkdir(parents=True, exist_ok=True)
