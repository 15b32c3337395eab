from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import SubmissionStatus


@dataclass(frozen=True)
class IndividualSubmission:
    """Domain entity: one progress report from a student."""

    submission_id: str
    submission_date: date
    title: str
    status: SubmissionStatus
    submitted_at: datetime
    week: Optional[int] = None
    work_done: tuple[str, ...] = field(default_factory=tuple)
    blockers: tuple[str, ...] = field(default_factory=tuple)
    next_steps: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "submissionId": self.submission_id,
            "week": self.week,
            "date": self.submission_date.isoformat(),
            "title": self.title,
            "workDone": list(self.work_done),
            "blockers": list(self.blockers),
            "nextSteps": list(self.next_steps),
            "status": self.status.value,
            "submittedAt": self.submitted_at.isoformat(),
        }


@dataclass(frozen=True)
class SubmissionRow:
    """Read-model for the admin list (submission joined with its author)."""

    submission: IndividualSubmission
    student_name: str
    student_email: str
    student_team: Optional[int]

    def to_dict(self) -> dict:
        data = self.submission.to_dict()
        data.update(studentName=self.student_name, studentEmail=self.student_email, studentTeam=self.student_team)
        return data
