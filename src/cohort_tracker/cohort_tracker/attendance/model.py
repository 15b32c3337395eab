from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, MarkedBy


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one calendar date."""

    session_date: date
    status: AttendanceStatus
    timestamp: datetime
    comment: Optional[str] = None
    marked_by: MarkedBy = MarkedBy.SELF
    marked_by_email: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "date": self.session_date.isoformat(),
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
            "comment": self.comment,
            "markedBy": self.marked_by.value,
        }
        if self.marked_by == MarkedBy.ADMIN:
            data["markedByEmail"] = self.marked_by_email
        return data


@dataclass(frozen=True)
class RosterEntry:
    """Read-model: a student together with their attendance history (ordered by date)."""

    name: str
    email: str
    team: Optional[int] = None
    attendance: tuple[AttendanceRecord, ...] = field(default_factory=tuple)

    def record_for(self, day: date) -> Optional[AttendanceRecord]:
        for r in self.attendance:
            if r.session_date == day:
                return r
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "email": self.email,
            "team": self.team,
            "attendance": [r.to_dict() for r in self.attendance],
        }
