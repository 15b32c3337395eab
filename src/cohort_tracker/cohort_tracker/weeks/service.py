from __future__ import annotations

from datetime import date, datetime
from typing import Callable

from ..common.datetime_utils import now_local, program_today
from ..scheduling.model import ScheduleConfig
from .model import CourseWeek
from .repository import CourseWeekRepository


def week_status(week: CourseWeek, today: date) -> dict:
    """Unlock state of a week relative to ``today``.

    Unpublished weeks are never locked.
    """

    days_since_start = (today - week.start_date).days
    is_unlocked = week.start_date <= today or not week.published
    return {
        "isUnlocked": is_unlocked,
        "daysSinceStart": days_since_start,
        "daysUntilUnlock": max(-days_since_start, 0),
        "isCurrent": is_unlocked and 0 <= days_since_start < 7,
    }


class CourseWeekService:
    def __init__(self, weeks: CourseWeekRepository, schedule: ScheduleConfig, *, clock: Callable[[], datetime] = now_local):
        self._weeks = weeks
        self._schedule = schedule
        self._clock = clock

    def list_weeks(self, *, now: datetime | None = None) -> dict:
        today = program_today(now or self._clock(), self._schedule.timezone)
        return {
            "weeks": [
                {
                    "weekNumber": w.week_number,
                    "title": w.title,
                    "description": w.description,
                    "published": w.published,
                    "startDate": w.start_date.isoformat(),
                    "learningTargets": list(w.learning_targets),
                    **week_status(w, today),
                }
                for w in self._weeks.list_all()
            ],
            "courseStartDate": self._schedule.program_start.isoformat(),
        }
