"""
Configuration settings for ReviewScout.

Centralized configuration for scraping, storage and analysis parameters.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = Path(os.getenv("REVIEWSCOUT_DATA_ROOT", PROJECT_ROOT / "data"))
OUTPUT_ROOT = Path(os.getenv("REVIEWSCOUT_OUTPUT_ROOT", PROJECT_ROOT / "output"))

# Browser / rendering
HEADLESS = os.getenv("PLAYWRIGHT_HEADLESS", "true").lower() in ("1", "true", "yes")
NAVIGATION_TIMEOUT_MS = 30000
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

# Delays (milliseconds)
SETTLE_DELAY_MS = 3000  # DOM keeps mutating after network idle
CONSENT_SETTLE_MS = 2000
CLICK_SETTLE_MS = 2000

# Scroll-to-load
SCROLL_MAX_ITERATIONS = 10
SCROLL_DELTA_Y = 1000
SCROLL_DELAY_MS = 1500

# Scraping
DEFAULT_MAX_REVIEWS = 5
SOURCE_TAG = "google_maps"
MIN_RESIDUE_TEXT_LENGTH = 20

# Debug screenshots are only written when this is set
DEBUG_SCREENSHOT_DIR = os.getenv("REVIEWSCOUT_DEBUG_SCREENSHOTS", "")

# Analysis
POSITIVE_THRESHOLD = 1  # score > threshold
NEGATIVE_THRESHOLD = -1  # score < threshold
TOP_KEYWORDS_LIMIT = 15
TOP_SNIPPETS_LIMIT = 5

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewscout.log"
