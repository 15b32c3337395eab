from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import as_list, require_non_empty
from ..core.enums import SubmissionStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import IndividualSubmission
from .repository import SubmissionRepository

logger = logging.getLogger(__name__)


def new_submission_id(now: datetime) -> str:
    return f"{int(now.timestamp() * 1000)}-{secrets.token_hex(5)[:9]}"


class SubmissionService:
    def __init__(self, submissions: SubmissionRepository, *, clock: Callable[[], datetime] = now_local):
        self._submissions = submissions
        self._clock = clock

    def submit(
        self,
        email: str,
        *,
        title: str,
        work_done,
        status: str,
        blockers=None,
        next_steps=None,
        week: Optional[int] = None,
        now: datetime | None = None,
    ) -> IndividualSubmission:
        title = require_non_empty(title, "Title")
        work_done_items = as_list(work_done)
        if not work_done_items:
            raise ValidationError("Work done is required")
        try:
            status_value = SubmissionStatus(status)
        except ValueError:
            raise ValidationError("Status must be green, yellow or red")

        if week is not None:
            try:
                week = int(week)
            except (TypeError, ValueError):
                raise ValidationError("Week must be a number")

        now = now or self._clock()
        submission = IndividualSubmission(
            submission_id=new_submission_id(now),
            week=week,
            submission_date=now.date(),
            title=title,
            work_done=tuple(work_done_items),
            blockers=tuple(as_list(blockers)),
            next_steps=tuple(as_list(next_steps)),
            status=status_value,
            submitted_at=now,
        )

        if not self._submissions.add(email, submission):
            raise NotFoundError("Student not found")
        logger.info("Submission %s from %s", submission.submission_id, email)
        return submission

    def list_own(self, email: str) -> list[IndividualSubmission]:
        return list(self._submissions.list_for_student(email))

    def list_all(self) -> dict:
        rows = sorted(self._submissions.list_all(), key=lambda r: r.submission.submitted_at, reverse=True)
        return {
            "submissions": [r.to_dict() for r in rows],
            "totalStudents": len({r.student_email for r in rows}),
            "totalSubmissions": len(rows),
        }
