"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 100
MAX_HISTORY_PAGE = 10_000

# Longest range a single week-off request may cover, inclusive.
MAX_WEEK_OFF_DAYS = 366

# Week-off records are stamped at this local time with zero duration.
WEEK_OFF_START_TIME = time(9, 0)

# Excel limits sheet names to 31 characters.
EXCEL_SHEET_NAME_MAX = 31
