from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local, program_today, to_program_time, week_monday
from ..core.constants import DEFAULT_RECENT_ATTENDANCE
from ..core.enums import AttendanceStatus, MarkedBy
from ..core.exceptions import NotFoundError
from ..reporting.aggregator import round_half_up
from ..scheduling.classifier import is_scheduled_day
from ..scheduling.model import ScheduleConfig
from .cycle import next_status
from .evaluator import evaluate_check_in
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        schedule: ScheduleConfig,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._schedule = schedule
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def _now(self, now: datetime | None) -> datetime:
        # Naive values are program-local; stored timestamps must be aware.
        return to_program_time(now or self._clock(), self._schedule.timezone)

    def _today(self, now: datetime) -> date:
        return program_today(now, self._schedule.timezone)

    def _require_student(self, email: str) -> None:
        if self._attendance.get_roster_entry(email) is None:
            raise NotFoundError("Student not found")

    def check_in(self, email: str, *, comment: Optional[str] = None, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        self._require_student(email)

        existing = self._attendance.get_record(email, self._today(now))
        record = evaluate_check_in(
            existing,
            now,
            comment=comment,
            tz_name=self._schedule.timezone,
            factory=self._factory,
        )
        self._attendance.append_record(email, record)
        logger.info("Check-in %s on %s: %s", email, record.session_date, record.status.value)
        return record

    def today_status(self, email: str, *, now: datetime | None = None) -> dict:
        now = self._now(now)
        self._require_student(email)

        today = self._today(now)
        record = self._attendance.get_record(email, today)
        recent = self._attendance.get_recent(email, DEFAULT_RECENT_ATTENDANCE)
        return {
            "today": today.isoformat(),
            "checkedIn": record is not None,
            "isScheduledDay": is_scheduled_day(today, self._schedule),
            "attendance": record.to_dict() if record else None,
            "recentAttendance": [r.to_dict() for r in recent],
        }

    def mark(
        self,
        *,
        admin_email: str,
        student_email: str,
        session_date: date,
        status: AttendanceStatus,
        comment: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Admin override: replaces whatever is stored for that date."""

        now = self._now(now)
        self._require_student(student_email)

        record = AttendanceRecord(
            session_date=session_date,
            status=status,
            timestamp=now,
            comment=comment or None,
            marked_by=MarkedBy.ADMIN,
            marked_by_email=admin_email,
        )
        self._attendance.upsert_record(student_email, record)
        logger.info("Admin %s marked %s on %s as %s", admin_email, student_email, session_date, status.value)
        return record

    def cycle(self, *, admin_email: str, student_email: str, session_date: date, now: datetime | None = None) -> AttendanceRecord:
        """Advance the admin grid cell one step.

        When the cycle has no next step the stored record is returned untouched.
        """

        self._require_student(student_email)
        current = self._attendance.get_record(student_email, session_date)
        nxt = next_status(current.status if current else None)
        if nxt is None:
            logger.info("Cycle left %s on %s as %s", student_email, session_date, current.status.value)
            return current
        return self.mark(
            admin_email=admin_email,
            student_email=student_email,
            session_date=session_date,
            status=nxt,
            comment=current.comment if current else None,
            now=now,
        )

    def week_overview(self, *, now: datetime | None = None) -> dict:
        """Admin grid for the current Mon-Fri week plus today's tallies."""

        now = self._now(now)
        today = self._today(now)
        monday = week_monday(today)
        week_dates = [monday + timedelta(days=i) for i in range(5)]

        roster = self._attendance.list_roster()
        todays = [s.record_for(today) for s in roster]
        counts = {
            status: sum(1 for r in todays if r is not None and r.status == status)
            for status in (
                AttendanceStatus.PRESENT,
                AttendanceStatus.PRESENT_LATE,
                AttendanceStatus.EXCUSED,
                AttendanceStatus.ABSENT,
            )
        }
        marked = sum(counts.values())
        total = len(roster)
        present_or_late = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.PRESENT_LATE]

        return {
            "students": [s.to_dict() for s in roster],
            "weekDates": [d.isoformat() for d in week_dates],
            "scheduledDates": [d.isoformat() for d in week_dates if is_scheduled_day(d, self._schedule)],
            "today": today.isoformat(),
            "todayStats": {
                "present": counts[AttendanceStatus.PRESENT],
                "late": counts[AttendanceStatus.PRESENT_LATE],
                "excused": counts[AttendanceStatus.EXCUSED],
                "absent": counts[AttendanceStatus.ABSENT],
                "pending": total - marked,
                "total": total,
                "rate": round_half_up(100 * present_or_late / total) if total else 0,
            },
        }
