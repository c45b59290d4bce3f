"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Week navigation: current week back to 11 weeks ago.
MIN_WEEK_OFFSET = -11
MAX_WEEK_OFFSET = 0

DAYS_PER_WEEK = 7

# Placeholder shown for missing durations and timestamps.
NO_VALUE = "—"

DEFAULT_API_TIMEOUT = 10
RANGE_QUERY_PAGE_LIMIT = 10000
