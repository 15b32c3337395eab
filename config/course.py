import os

# Course calendar shared by every environment. Dates are ISO strings,
# weekdays are ISO numbers (1=Mon..7=Sun).
COURSE_TIMEZONE = os.getenv("COURSE_TIMEZONE", "Europe/Stockholm")
COURSE_START_DATE = os.getenv("COURSE_START_DATE", "2026-01-19")
COURSE_WEEK_ONE_END = os.getenv("COURSE_WEEK_ONE_END", "2026-01-23")
COURSE_WEEK_ONE_DATES = tuple(
    d.strip() for d in os.getenv("COURSE_WEEK_ONE_DATES", "2026-01-20,2026-01-21,2026-01-22").split(",") if d.strip()
)
COURSE_SCHEDULED_WEEKDAYS = tuple(
    int(d) for d in os.getenv("COURSE_SCHEDULED_WEEKDAYS", "2,3,4").split(",") if d.strip()
)
COURSE_TOTAL_WEEKS = int(os.getenv("COURSE_TOTAL_WEEKS", "11"))
COURSE_TOTAL_TEAMS = int(os.getenv("COURSE_TOTAL_TEAMS", "8"))

# Empty means any domain may sign up
ALLOWED_EMAIL_DOMAIN = os.getenv("ALLOWED_EMAIL_DOMAIN", "") or None
