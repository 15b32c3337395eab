from __future__ import annotations

from datetime import date, datetime

import pytz

from cohort_tracker.weeks.model import CourseWeek
from cohort_tracker.weeks.service import CourseWeekService, week_status
from tests.fakes import COURSE, FixedClock, InMemoryWeeks


def _week(number: int, start: date, published: bool = True) -> CourseWeek:
    return CourseWeek(week_number=number, title=f"Week {number}", description="", published=published, start_date=start)


def test_current_week_is_unlocked():
    status = week_status(_week(2, date(2026, 1, 26)), date(2026, 1, 28))

    assert status == {"isUnlocked": True, "daysSinceStart": 2, "daysUntilUnlock": 0, "isCurrent": True}


def test_past_week_is_unlocked_but_not_current():
    status = week_status(_week(1, date(2026, 1, 19)), date(2026, 1, 28))

    assert status["isUnlocked"] is True
    assert status["isCurrent"] is False


def test_future_week_is_locked_until_start():
    status = week_status(_week(3, date(2026, 2, 2)), date(2026, 1, 28))

    assert status == {"isUnlocked": False, "daysSinceStart": -5, "daysUntilUnlock": 5, "isCurrent": False}


def test_unpublished_week_is_never_locked():
    status = week_status(_week(4, date(2026, 2, 9), published=False), date(2026, 1, 28))

    assert status["isUnlocked"] is True
    assert status["isCurrent"] is False


def test_list_weeks_in_order():
    repo = InMemoryWeeks([_week(2, date(2026, 1, 26)), _week(1, date(2026, 1, 19))])
    svc = CourseWeekService(repo, COURSE, clock=FixedClock(datetime(2026, 1, 28, 8, 0, tzinfo=pytz.utc)))

    result = svc.list_weeks()

    assert result["courseStartDate"] == "2026-01-19"
    assert [w["weekNumber"] for w in result["weeks"]] == [1, 2]
    assert result["weeks"][1]["isCurrent"] is True
