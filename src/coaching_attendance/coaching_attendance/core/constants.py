"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BATCHES = ("S1", "S2", "S3", "N1", "N2", "E1")

# Legacy rows use "00" to mean "no roll number assigned".
UNASSIGNED_ROLL = "00"

HISTORY_WINDOW = 10
WEEK_WINDOW = 6
STREAK_THRESHOLD = 3
FREQUENT_THRESHOLD = 2
RECENT_PATTERN_LENGTH = 7

RESET_CONFIRMATION = "RESET"

DEFAULT_SESSION_MAX_AGE_SECONDS = 12 * 60 * 60
DEFAULT_CENTER_NAME = "Wings Coaching Center"
