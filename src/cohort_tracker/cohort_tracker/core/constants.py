"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Local hour (program timezone) from which a self check-in counts as late.
LATE_CHECKIN_HOUR = 10

DEFAULT_TIMEZONE = "Europe/Stockholm"
DEFAULT_RECENT_ATTENDANCE = 7
DEFAULT_LOGIN_HISTORY_LIMIT = 100
DEFAULT_TOTAL_TEAMS = 8

FEEDBACK_TITLE_MAX = 200
FEEDBACK_DESCRIPTION_MAX = 2000

REPORT_LEGEND = (
    "Legend:",
    "✓ = Present",
    "L = Late",
    "E = Excused",
    "X = Absent",
    "(blank) = Not marked",
)
