import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from src.paths import LOGS, ensure_dirs

LOGGER_NAME = "weatherdashboard"


def setup_logging(log_dir: str | None = None) -> logging.Logger:
    """Configure logging with rotation and formatting."""
    logger = logging.getLogger(LOGGER_NAME)
    # Streamlit ajaa skriptin uudelleen joka interaktiolla: handlerit vain kerran
    if logger.handlers:
        return logger

    if log_dir is None:
        log_dir = str(LOGS)
    ensure_dirs()
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    logger.setLevel(logging.INFO)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(
        Path(log_dir) / "weatherdashboard.log",
        maxBytes=5_000_000,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    console.setFormatter(formatter)
    file_handler.setFormatter(formatter)

    logger.addHandler(console)
    logger.addHandler(file_handler)
    return logger
