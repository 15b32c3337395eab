from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from .model import ScheduleConfig


def is_scheduled_day(day: date, config: ScheduleConfig) -> bool:
    """True when ``day`` is a session day under the cohort's weekly pattern."""
    if config.program_start <= day <= config.week_one_end:
        return day in config.week_one_dates
    return day.isoweekday() in config.scheduled_weekdays


def is_weekday(day: date) -> bool:
    return day.isoweekday() <= 5


def weekday_dates(start: date, end: date) -> list[date]:
    """Every Mon-Fri date from ``start`` to ``end`` inclusive."""
    out: list[date] = []
    current = start
    while current <= end:
        if is_weekday(current):
            out.append(current)
        current += timedelta(days=1)
    return out


def scheduled_dates(dates: Iterable[date], config: ScheduleConfig) -> list[date]:
    return [d for d in dates if is_scheduled_day(d, config)]
