from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, RosterEntry
from ..core.constants import REPORT_LEGEND
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidDateRange
from ..scheduling.classifier import scheduled_dates, weekday_dates
from ..scheduling.model import ScheduleConfig
from .aggregator import compute_cohort_stats

STATUS_CODES = {
    AttendanceStatus.PRESENT: "✓",
    AttendanceStatus.PRESENT_LATE: "L",
    AttendanceStatus.EXCUSED: "E",
    AttendanceStatus.ABSENT: "X",
}

# Swedish short weekday names, as on the course's existing sheets.
_DAY_NAMES = ("mån", "tis", "ons", "tors", "fre", "lör", "sön")


def status_code(record: Optional[AttendanceRecord]) -> str:
    if record is None:
        return ""
    return STATUS_CODES.get(record.status, "")


def column_label(day: date) -> str:
    return f"{_DAY_NAMES[day.weekday()]} {day.isoformat()}"


def format_report(roster: Sequence[RosterEntry], start: date, end: date, config: ScheduleConfig) -> str:
    """Render the cohort attendance grid as CSV text.

    One column per weekday in ``[start, end]``; counts and rates only consider
    scheduled session days. Cells with commas or quotes are quoted by the csv
    writer (minimal quoting, quotes doubled).
    """

    if end < start:
        raise InvalidDateRange(start, end)

    days = weekday_dates(start, end)
    cohort = compute_cohort_stats(roster, scheduled_dates(days, config))

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(
        ["Student Name", "Email", "Team"]
        + [column_label(d) for d in days]
        + ["Present", "Late", "Excused", "Absent", "Rate %"]
    )

    for item in cohort.students:
        student, stats = item.student, item.stats
        by_date = {r.session_date: r for r in student.attendance}
        writer.writerow(
            [student.name, student.email, str(student.team) if student.team is not None else "-"]
            + [status_code(by_date.get(d)) for d in days]
            + [str(stats.present), str(stats.late), str(stats.excused), str(stats.absent), f"{stats.rate}%"]
        )

    writer.writerow([])
    writer.writerow(
        ["TOTALS", "", ""]
        + ["" for _ in days]
        + [str(cohort.present), str(cohort.late), str(cohort.excused), str(cohort.absent), f"{cohort.rate}%"]
    )

    return out.getvalue() + "\n" + "\n".join(REPORT_LEGEND)
