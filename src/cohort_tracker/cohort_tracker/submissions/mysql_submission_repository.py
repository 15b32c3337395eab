from __future__ import annotations

from typing import Sequence

from ..core.enums import SubmissionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_list, fetchall, fetchone, from_db_datetime, load_list, to_db_datetime
from .model import IndividualSubmission, SubmissionRow
from .repository import SubmissionRepository

_COLUMNS = "sub.submission_id, sub.week, sub.submission_date, sub.title, sub.work_done, sub.blockers, sub.next_steps, sub.status, sub.submitted_at"


def _to_submission(r: dict) -> IndividualSubmission:
    return IndividualSubmission(
        submission_id=r["submission_id"],
        week=r.get("week"),
        submission_date=r["submission_date"],
        title=r["title"],
        work_done=tuple(load_list(r.get("work_done"))),
        blockers=tuple(load_list(r.get("blockers"))),
        next_steps=tuple(load_list(r.get("next_steps"))),
        status=SubmissionStatus(r["status"]),
        submitted_at=from_db_datetime(r["submitted_at"]),
    )


class MySQLSubmissionRepository(SubmissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, email: str) -> Sequence[IndividualSubmission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM submissions sub
                JOIN students s ON s.student_id = sub.student_id
                WHERE s.email=%s
                ORDER BY sub.submitted_at ASC
                """,
                (email,),
            )
            return [_to_submission(r) for r in fetchall(cur)]

    def add(self, email: str, submission: IndividualSubmission) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id FROM students WHERE email=%s", (email,))
            s = fetchone(cur)
            if not s:
                return False
            cur.execute(
                """
                INSERT INTO submissions
                    (submission_id, student_id, week, submission_date, title, work_done, blockers, next_steps, status, submitted_at)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    submission.submission_id,
                    int(s["student_id"]),
                    submission.week,
                    submission.submission_date,
                    submission.title,
                    dump_list(submission.work_done),
                    dump_list(submission.blockers),
                    dump_list(submission.next_steps),
                    submission.status.value,
                    to_db_datetime(submission.submitted_at),
                ),
            )
            return True

    def list_all(self) -> Sequence[SubmissionRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, s.name, s.email, s.team
                FROM submissions sub
                JOIN students s ON s.student_id = sub.student_id
                ORDER BY sub.submitted_at DESC
                """
            )
            return [
                SubmissionRow(
                    submission=_to_submission(r),
                    student_name=r["name"],
                    student_email=r["email"],
                    student_team=r.get("team"),
                )
                for r in fetchall(cur)
            ]
