"""Configuration management for the expense tracker.

This module centralizes all configuration values including paths,
storage keys, date formats and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Tuple

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory and the JSON file standing in for browser local storage
DATA_DIR = Path(os.getenv("EXPENSE_TRACKER_DATA_DIR", _PROJECT_ROOT / "data"))
STORAGE_PATH = Path(
    os.getenv("EXPENSE_TRACKER_STORAGE_PATH", DATA_DIR / "local_storage.json")
).resolve()

LOG_LEVEL = os.getenv("EXPENSE_TRACKER_LOG_LEVEL", "INFO").upper()

# Storage keys
SUMMARIES_KEY = "summariesByMonth"
FIELDS_KEY = "fields"

# Categories in form order; everything except income counts as an expense
CATEGORIES: Tuple[str, ...] = ("income", "bills", "food", "other")
EXPENSE_CATEGORIES: Tuple[str, ...] = ("bills", "food", "other")

# strptime/strftime patterns
MONTH_KEY_FORMAT = "%m/%Y"
DAY_FORMAT = "%m/%d/%Y"
MONTH_LABEL_FORMAT = "%B %Y"
SHORT_DATE_FORMAT = "%m/%d/%Y"
INVALID_DATE_LABEL = "Invalid Date"

# Chart series and their colours
SERIES_COLORS: Dict[str, str] = {
    "income": "#8884d8",
    "totalExpenses": "#82ca9d",
    "savings": "#ffc658",
}


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    STORAGE_PATH.parent.mkdir(parents=True, exist_ok=True)
