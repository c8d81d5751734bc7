# settings.py
"""Shared constants and logging setup for the Tambola game."""

import logging
import os

# -------------------------
# CONFIG
# -------------------------
ADMIN_KEY = os.getenv("TAMBOLA_ADMIN_KEY", "VISHNU2025")  # change this before production
MAX_TICKET_COUNT = 10
DEFAULT_TICKET_COUNT = max(1, min(int(os.getenv("TAMBOLA_TICKET_COUNT", "3")), MAX_TICKET_COUNT))
TICKETS_PER_SHEET = 6
TICKET_ROWS, TICKET_COLS = 3, 9
NUMBERS_PER_ROW = 5
TICKET_IMG_W, TICKET_IMG_H = 540, 300
FONT_PATH = os.getenv("TAMBOLA_FONT_PATH") or None  # optional .ttf path
RECENT_CALLS_SHOWN = 5
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def configure_logging(level_name: str = LOG_LEVEL) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # Streamlit's watcher is chatty at DEBUG
    logging.getLogger("watchdog").setLevel(logging.WARNING)
