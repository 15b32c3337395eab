from __future__ import annotations

from datetime import date

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DEFAULT_TIMEZONE
from .model import ScheduleConfig


def _as_date(value) -> date:
    return value if isinstance(value, date) else parse_iso_date(str(value))


def schedule_config_from_settings(settings) -> ScheduleConfig:
    """Build the immutable schedule from a settings module or object."""

    start = _as_date(getattr(settings, "COURSE_START_DATE"))
    week_one_end = _as_date(getattr(settings, "COURSE_WEEK_ONE_END"))
    week_one_dates = frozenset(_as_date(d) for d in getattr(settings, "COURSE_WEEK_ONE_DATES", ()))
    weekdays = frozenset(int(d) for d in getattr(settings, "COURSE_SCHEDULED_WEEKDAYS", (2, 3, 4)))

    return ScheduleConfig(
        program_start=start,
        week_one_end=week_one_end,
        week_one_dates=week_one_dates,
        scheduled_weekdays=weekdays,
        timezone=str(getattr(settings, "COURSE_TIMEZONE", DEFAULT_TIMEZONE)),
        total_weeks=int(getattr(settings, "COURSE_TOTAL_WEEKS", 11)),
    )
