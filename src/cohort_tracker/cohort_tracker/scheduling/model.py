from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ScheduleConfig:
    """Weekly session pattern of a cohort.

    Week 1 is an exception window: only the enumerated dates inside
    ``[program_start, week_one_end]`` are session days. Every other date is a
    session day when its ISO weekday (1=Mon..7=Sun) is in ``scheduled_weekdays``.
    """

    program_start: date
    week_one_end: date
    week_one_dates: frozenset[date]
    scheduled_weekdays: frozenset[int] = field(default_factory=lambda: frozenset({2, 3, 4}))
    timezone: str = DEFAULT_TIMEZONE
    total_weeks: int = 11

    def __post_init__(self):
        if self.week_one_end < self.program_start:
            raise ValidationError("week_one_end must not precede program_start")
        for d in self.week_one_dates:
            if not (self.program_start <= d <= self.week_one_end):
                raise ValidationError(f"Week 1 date {d.isoformat()} lies outside the week 1 window")
        for wd in self.scheduled_weekdays:
            if not 1 <= int(wd) <= 7:
                raise ValidationError(f"Invalid ISO weekday: {wd}")
