"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE_OFFSET_MINUTES = -120
DEFAULT_GRACE_MINUTES = 15
DEFAULT_PAGE_LIMIT = 50

DEFAULT_EMPLOYEE_SHIFT_START = "09:00"
WEEKDAY_SHIFT = ("09:00", "17:00")
SATURDAY_SHIFT = ("10:00", "16:00")

# Python weekday(): Monday == 0
FRIDAY = 4
SATURDAY = 5

# Local-hour windows [start, end] in which a punch counts as a normal arrival,
# keyed by the employee's shift-start hour.
ARRIVAL_WINDOWS = {
    9: (6, 12),
    8: (5, 11),
    7: (4, 10),
}
DEFAULT_ARRIVAL_WINDOW_HOUR = 9
OVERNIGHT_LAST_HOUR = 5
EARLY_SHIFT_MAX_START_HOUR = 7
EARLY_SHIFT_EDGE = ("04:30:00", "05:00:00")

# Friday attendance validation windows (seconds of day, inclusive).
FRIDAY_WINDOWS = (
    (11 * 3600, 16 * 3600),
    (12 * 3600, 17 * 3600),
)

OVERTIME_START_OFFSET_SECONDS = 3600

LATE_TIERS = (
    (60, 1.0),
    (30, 0.5),
)
LATE_BASE_PENALTY = 0.25
MISSING_CHECKOUT_PENALTY = 0.5
EARLY_LEAVE_PENALTY = 0.5
ABSENCE_PENALTY = 1.0
ABSENCE_REPORT_WEIGHT = 2

COLLECTIONS_SECTOR = "التحصيل"

OFFICIAL_LEAVE_CATEGORY = "Official Leave"
HR_LEAVE_CATEGORY = "HR Leave"

NOTE_OVERNIGHT_STAY = "مبيت"
NOTE_MISSING_CHECKIN = "سهو بصمة دخول"
NOTE_SEPARATOR = "، "

# Punch fetch window widening on each side of the requested range.
PUNCH_SEARCH_PADDING_HOURS = 12
