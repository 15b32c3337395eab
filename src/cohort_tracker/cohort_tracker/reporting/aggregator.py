from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord, RosterEntry
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    present: int
    late: int
    excused: int
    absent: int
    rate: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "late": self.late,
            "excused": self.excused,
            "absent": self.absent,
            "rate": self.rate,
        }


@dataclass(frozen=True)
class StudentStats:
    student: RosterEntry
    stats: AttendanceStats


@dataclass(frozen=True)
class CohortStats:
    students: list[StudentStats]
    present: int
    late: int
    excused: int
    absent: int
    rate: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_stats(records: Iterable[AttendanceRecord], scheduled_dates: Iterable[date]) -> AttendanceStats:
    """Per-student tallies over the scheduled session days.

    The denominator is always the number of scheduled days: a scheduled day
    without any record counts against the rate but in none of the tallies.
    """

    scheduled = set(scheduled_dates)
    counts = Counter(r.status for r in records if r.session_date in scheduled)

    present = counts[AttendanceStatus.PRESENT]
    late = counts[AttendanceStatus.PRESENT_LATE]
    rate = round_half_up(100 * (present + late) / len(scheduled)) if scheduled else 0

    return AttendanceStats(
        total=len(scheduled),
        present=present,
        late=late,
        excused=counts[AttendanceStatus.EXCUSED],
        absent=counts[AttendanceStatus.ABSENT],
        rate=rate,
    )


def compute_cohort_stats(roster: Sequence[RosterEntry], scheduled_dates: Iterable[date]) -> CohortStats:
    scheduled = frozenset(scheduled_dates)
    per_student = [StudentStats(student=s, stats=compute_stats(s.attendance, scheduled)) for s in roster]

    mean_rate = (
        round_half_up(sum(s.stats.rate for s in per_student) / len(per_student)) if per_student else 0
    )
    return CohortStats(
        students=per_student,
        present=sum(s.stats.present for s in per_student),
        late=sum(s.stats.late for s in per_student),
        excused=sum(s.stats.excused for s in per_student),
        absent=sum(s.stats.absent for s in per_student),
        rate=mean_rate,
    )
