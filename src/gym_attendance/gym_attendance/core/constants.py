"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

COMPLIANT_THRESHOLD = 80.0
WARNING_THRESHOLD = 70.0
CRITICAL_THRESHOLD = 50.0

MIN_WEEKLY_VISITS = 1
MAX_WEEKLY_VISITS = 7

BLOCK_DURATION_MONTHS = 1

DEFAULT_QR_ROTATION_SECONDS = 30
QR_CODE_PREFIX = "GYM"

TOP_FREQUENT_LIMIT = 10
DEFAULT_HISTORY_LIMIT = 100
