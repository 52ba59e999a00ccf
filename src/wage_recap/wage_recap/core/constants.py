"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_FEED_LIMIT = 20
DEFAULT_WORK_DAYS = 1

REGULAR_TEAM_LABEL = "Regular Labor"
HELPER_TEAM_LABEL = "Helper Labor"
SPECIALIST_TEAM_LABEL = "Specialist"
SPECIALIST_FALLBACK_NAME = "Other"
UNKNOWN_PROJECT_NAME = "Project"

# Date window used by the feed (latest rows regardless of date).
FEED_DATE_FROM = "1900-01-01"
FEED_DATE_TO = "2999-12-31"
