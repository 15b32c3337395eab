from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus, MarkedBy
from ..core.exceptions import AlreadyCheckedIn, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import AttendanceRecord, RosterEntry
from .repository import AttendanceRepository

_RECORD_COLUMNS = "ar.session_date, ar.status, ar.recorded_at, ar.comment, ar.marked_by, ar.marked_by_email"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        session_date=r["session_date"],
        status=AttendanceStatus(r["status"]),
        timestamp=from_db_datetime(r["recorded_at"]),
        comment=r.get("comment"),
        marked_by=MarkedBy(r["marked_by"]),
        marked_by_email=r.get("marked_by_email"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_roster(self) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, name, email, team
                FROM students
                WHERE role='student'
                ORDER BY name ASC
                """
            )
            students = fetchall(cur)

            cur.execute(
                f"""
                SELECT ar.student_id, {_RECORD_COLUMNS}
                FROM attendance_records ar
                JOIN students s ON s.student_id = ar.student_id
                WHERE s.role='student'
                ORDER BY ar.session_date ASC
                """
            )
            by_student: dict[int, list[AttendanceRecord]] = {}
            for r in fetchall(cur):
                by_student.setdefault(int(r["student_id"]), []).append(_to_record(r))

        return [
            RosterEntry(
                name=s["name"],
                email=s["email"],
                team=s.get("team"),
                attendance=tuple(by_student.get(int(s["student_id"]), [])),
            )
            for s in students
        ]

    def get_roster_entry(self, email: str) -> Optional[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id, name, email, team FROM students WHERE email=%s", (email,))
            s = fetchone(cur)
            if not s:
                return None

            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.student_id=%s
                ORDER BY ar.session_date ASC
                """,
                (int(s["student_id"]),),
            )
            records = tuple(_to_record(r) for r in fetchall(cur))

        return RosterEntry(name=s["name"], email=s["email"], team=s.get("team"), attendance=records)

    def get_record(self, email: str, session_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                JOIN students s ON s.student_id = ar.student_id
                WHERE s.email=%s AND ar.session_date=%s
                """,
                (email, session_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent(self, email: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                JOIN students s ON s.student_id = ar.student_id
                WHERE s.email=%s
                ORDER BY ar.session_date DESC
                LIMIT %s
                """,
                (email, int(limit)),
            )
            rows = [_to_record(r) for r in fetchall(cur)]
        rows.reverse()
        return rows

    def _student_id(self, cur, email: str) -> int:
        cur.execute("SELECT student_id FROM students WHERE email=%s", (email,))
        s = fetchone(cur)
        if not s:
            raise NotFoundError("Student not found")
        return int(s["student_id"])

    def append_record(self, email: str, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                student_id = self._student_id(cur, email)
                cur.execute(
                    """
                    INSERT INTO attendance_records
                        (student_id, session_date, status, recorded_at, comment, marked_by, marked_by_email)
                    VALUES (%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        student_id,
                        record.session_date,
                        record.status.value,
                        to_db_datetime(record.timestamp),
                        record.comment,
                        record.marked_by.value,
                        record.marked_by_email,
                    ),
                )
        except IntegrityError:
            # uq_attendance_student_date: a concurrent check-in won the race.
            existing = self.get_record(email, record.session_date)
            if existing is None:
                raise
            raise AlreadyCheckedIn(existing)

    def upsert_record(self, email: str, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            student_id = self._student_id(cur, email)
            cur.execute(
                """
                INSERT INTO attendance_records
                    (student_id, session_date, status, recorded_at, comment, marked_by, marked_by_email)
                VALUES (%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    recorded_at=VALUES(recorded_at),
                    comment=VALUES(comment),
                    marked_by=VALUES(marked_by),
                    marked_by_email=VALUES(marked_by_email)
                """,
                (
                    student_id,
                    record.session_date,
                    record.status.value,
                    to_db_datetime(record.timestamp),
                    record.comment,
                    record.marked_by.value,
                    record.marked_by_email,
                ),
            )
