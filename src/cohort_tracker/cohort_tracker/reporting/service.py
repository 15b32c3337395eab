from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, program_today
from ..core.exceptions import InvalidDateRange
from ..scheduling.classifier import scheduled_dates, weekday_dates
from ..scheduling.model import ScheduleConfig
from .aggregator import compute_cohort_stats
from .formatter import format_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportFile:
    filename: str
    content: str
    mimetype: str = "text/csv"


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        schedule: ScheduleConfig,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._schedule = schedule
        self._clock = clock

    def _resolve_range(self, start: Optional[date], end: Optional[date], today: date) -> tuple[date, date]:
        start = start or self._schedule.program_start
        end = end or today
        if end < start:
            raise InvalidDateRange(start, end)
        return start, end

    def export_csv(self, *, start: Optional[date] = None, end: Optional[date] = None, now: Optional[datetime] = None) -> ReportFile:
        """Full-cohort CSV export. Defaults to program start through today."""

        now = now or self._clock()
        today = program_today(now, self._schedule.timezone)
        start, end = self._resolve_range(start, end, today)

        roster = self._attendance.list_roster()
        content = format_report(roster, start, end, self._schedule)
        logger.info("Attendance export %s..%s for %d students", start, end, len(roster))

        return ReportFile(filename=f"attendance_report_{today.isoformat()}.csv", content=content)

    def build_summary(self, *, start: Optional[date] = None, end: Optional[date] = None, now: Optional[datetime] = None) -> dict:
        now = now or self._clock()
        start, end = self._resolve_range(start, end, program_today(now, self._schedule.timezone))

        days = scheduled_dates(weekday_dates(start, end), self._schedule)
        cohort = compute_cohort_stats(self._attendance.list_roster(), days)

        return {
            "start": start.isoformat(),
            "end": end.isoformat(),
            "scheduledDays": [d.isoformat() for d in days],
            "students": [
                {"name": s.student.name, "email": s.student.email, "team": s.student.team, **s.stats.to_dict()}
                for s in cohort.students
            ],
            "totals": {
                "present": cohort.present,
                "late": cohort.late,
                "excused": cohort.excused,
                "absent": cohort.absent,
                "rate": cohort.rate,
            },
        }
