from datetime import datetime

from cohort_tracker.attendance.factory import AttendanceStrategyFactory
from cohort_tracker.attendance.strategies.late_strategy import LateStrategy
from cohort_tracker.attendance.strategies.on_time_strategy import OnTimeStrategy
from cohort_tracker.core.enums import AttendanceStatus


def test_factory_checkin_before_late_hour_is_on_time():
    now = datetime(2026, 1, 20, 9, 59, 59)

    strategy = AttendanceStrategyFactory().for_checkin(local_now=now)

    assert isinstance(strategy, OnTimeStrategy)
    assert strategy.decide_checkin(local_now=now).status == AttendanceStatus.PRESENT


def test_factory_checkin_at_late_hour_is_late():
    now = datetime(2026, 1, 20, 10, 0, 0)

    strategy = AttendanceStrategyFactory().for_checkin(local_now=now)

    assert isinstance(strategy, LateStrategy)
    assert strategy.decide_checkin(local_now=now).status == AttendanceStatus.PRESENT_LATE


def test_factory_honours_custom_late_hour():
    factory = AttendanceStrategyFactory(late_hour=9)

    assert isinstance(factory.for_checkin(local_now=datetime(2026, 1, 20, 9, 0)), LateStrategy)
    assert isinstance(factory.for_checkin(local_now=datetime(2026, 1, 20, 8, 59)), OnTimeStrategy)
