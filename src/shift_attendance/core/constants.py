"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CHECK_IN_WINDOW_MINUTES = 60
CHECK_OUT_WINDOW_MINUTES = 120
MIN_WORK_DURATION_MINUTES = 240
REGULARIZATION_MONTHLY_QUOTA = 3

DEFAULT_TIME_ZONE = "Asia/Kolkata"
FALLBACK_TIME_ZONE = "UTC"

ABSENT_BELOW_HOURS = 4.0
HALF_DAY_BELOW_HOURS = 6.5

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT_12H = "%I:%M %p"

REGULARIZED_FLAG = "YES"
