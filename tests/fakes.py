from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from werkzeug.security import generate_password_hash

from cohort_tracker.attendance.model import AttendanceRecord, RosterEntry
from cohort_tracker.container import Container, assemble
from cohort_tracker.core.enums import FeedbackStatus, FeedbackType, Role
from cohort_tracker.core.exceptions import AlreadyCheckedIn
from cohort_tracker.feedback.model import FeedbackItem
from cohort_tracker.logins.model import LoginEvent, LoginHistoryFilter
from cohort_tracker.scheduling.model import ScheduleConfig
from cohort_tracker.students.model import Student
from cohort_tracker.submissions.model import IndividualSubmission, SubmissionRow
from cohort_tracker.weeks.model import CourseWeek

COURSE = ScheduleConfig(
    program_start=date(2026, 1, 19),
    week_one_end=date(2026, 1, 23),
    week_one_dates=frozenset({date(2026, 1, 20), date(2026, 1, 21), date(2026, 1, 22)}),
    scheduled_weekdays=frozenset({2, 3, 4}),
)


class InMemoryStudents:
    def __init__(self):
        self._by_email: dict[str, Student] = {}
        self._id = 0

    def get_by_email(self, email: str) -> Optional[Student]:
        return self._by_email.get(email)

    def create(self, *, name: str, email: str, role: Role, team: Optional[int] = None, password_hash: Optional[str] = None) -> int:
        self._id += 1
        self._by_email[email] = Student(
            student_id=self._id, name=name, email=email, role=role, team=team, password_hash=password_hash
        )
        return self._id

    def count_students(self) -> int:
        return sum(1 for s in self._by_email.values() if s.role == Role.STUDENT)


class InMemoryAttendance:
    def __init__(self):
        self._students: dict[str, tuple[str, Optional[int]]] = {}
        self._records: dict[str, dict[date, AttendanceRecord]] = {}

    def add_student(self, name: str, email: str, team: Optional[int] = None) -> None:
        self._students[email] = (name, team)
        self._records.setdefault(email, {})

    def _entry(self, email: str) -> RosterEntry:
        name, team = self._students[email]
        records = tuple(sorted(self._records[email].values(), key=lambda r: r.session_date))
        return RosterEntry(name=name, email=email, team=team, attendance=records)

    def list_roster(self):
        return sorted((self._entry(e) for e in self._students), key=lambda s: s.name)

    def get_roster_entry(self, email: str) -> Optional[RosterEntry]:
        return self._entry(email) if email in self._students else None

    def get_record(self, email: str, session_date: date) -> Optional[AttendanceRecord]:
        return self._records.get(email, {}).get(session_date)

    def get_recent(self, email: str, limit: int):
        records = sorted(self._records.get(email, {}).values(), key=lambda r: r.session_date)
        return records[-limit:]

    def append_record(self, email: str, record: AttendanceRecord) -> None:
        existing = self.get_record(email, record.session_date)
        if existing is not None:
            raise AlreadyCheckedIn(existing)
        self._records[email][record.session_date] = record

    def upsert_record(self, email: str, record: AttendanceRecord) -> None:
        self._records[email][record.session_date] = record


class InMemorySubmissions:
    def __init__(self, students: InMemoryStudents):
        self._students = students
        self._by_email: dict[str, list[IndividualSubmission]] = {}

    def list_for_student(self, email: str):
        return list(self._by_email.get(email, []))

    def add(self, email: str, submission: IndividualSubmission) -> bool:
        if self._students.get_by_email(email) is None:
            return False
        self._by_email.setdefault(email, []).append(submission)
        return True

    def list_all(self):
        rows = []
        for email, items in self._by_email.items():
            student = self._students.get_by_email(email)
            rows.extend(
                SubmissionRow(submission=s, student_name=student.name, student_email=email, student_team=student.team)
                for s in items
            )
        return rows


class InMemoryFeedback:
    def __init__(self):
        self._items: dict[int, FeedbackItem] = {}
        self._id = 0

    def _replace(self, item: FeedbackItem, **changes) -> None:
        self._items[item.feedback_id] = replace(item, **changes)

    def list_all(self):
        return list(self._items.values())

    def get_by_id(self, feedback_id: int) -> Optional[FeedbackItem]:
        return self._items.get(feedback_id)

    def create(self, *, type: FeedbackType, title: str, description: str, submitted_by_name: str,
               submitted_by_email: str, page_url: Optional[str], created_at: datetime) -> int:
        self._id += 1
        self._items[self._id] = FeedbackItem(
            feedback_id=self._id,
            type=type,
            title=title,
            description=description,
            status=FeedbackStatus.NEW,
            submitted_by_name=submitted_by_name,
            submitted_by_email=submitted_by_email,
            created_at=created_at,
            updated_at=created_at,
            votes=frozenset({submitted_by_email}),
            page_url=page_url,
        )
        return self._id

    def add_vote(self, feedback_id: int, email: str, *, at: datetime) -> bool:
        item = self._items[feedback_id]
        self._replace(item, votes=item.votes | {email}, updated_at=at)
        return True

    def remove_vote(self, feedback_id: int, email: str, *, at: datetime) -> bool:
        item = self._items[feedback_id]
        self._replace(item, votes=item.votes - {email}, updated_at=at)
        return True

    def update_admin_fields(self, feedback_id: int, *, status, admin_response, at: datetime) -> bool:
        item = self._items.get(feedback_id)
        if item is None:
            return False
        self._replace(
            item,
            status=status if status is not None else item.status,
            admin_response=admin_response if admin_response is not None else item.admin_response,
            updated_at=at,
        )
        return True


class InMemoryLoginHistory:
    def __init__(self):
        self.events: list[LoginEvent] = []

    def add(self, event: LoginEvent) -> int:
        self.events.append(event)
        return len(self.events)

    def _matching(self, criteria: LoginHistoryFilter) -> list[LoginEvent]:
        out = []
        for e in self.events:
            if criteria.email and criteria.email.lower() not in (e.email or "").lower():
                continue
            if criteria.success is not None and e.success != criteria.success:
                continue
            if criteria.start and e.occurred_at < criteria.start:
                continue
            if criteria.end and e.occurred_at > criteria.end:
                continue
            out.append(e)
        return sorted(out, key=lambda e: e.occurred_at, reverse=True)

    def find(self, criteria: LoginHistoryFilter, *, limit: int, offset: int):
        return self._matching(criteria)[offset:offset + limit]

    def count(self, criteria: LoginHistoryFilter) -> int:
        return len(self._matching(criteria))


class InMemoryWeeks:
    def __init__(self, weeks: list[CourseWeek] | None = None):
        self.weeks = list(weeks or [])

    def list_all(self):
        return sorted(self.weeks, key=lambda w: w.week_number)


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def build_test_container(clock: FixedClock, *, weeks: list[CourseWeek] | None = None) -> Container:
    """Container over in-memory repositories with one admin and two students."""

    students = InMemoryStudents()
    students.create(name="Admin", email="admin@example.com", role=Role.ADMIN,
                    password_hash=generate_password_hash("admin123"))
    students.create(name="Jane Smith", email="jane.smith@example.com", role=Role.STUDENT, team=1,
                    password_hash=generate_password_hash("student123"))
    students.create(name="Erik Larsson", email="erik.larsson@example.com", role=Role.STUDENT, team=2,
                    password_hash=generate_password_hash("student123"))

    attendance = InMemoryAttendance()
    attendance.add_student("Jane Smith", "jane.smith@example.com", 1)
    attendance.add_student("Erik Larsson", "erik.larsson@example.com", 2)

    return assemble(
        schedule=COURSE,
        students_repo=students,
        attendance_repo=attendance,
        submissions_repo=InMemorySubmissions(students),
        feedback_repo=InMemoryFeedback(),
        login_history_repo=InMemoryLoginHistory(),
        weeks_repo=InMemoryWeeks(weeks),
        clock=clock,
    )
