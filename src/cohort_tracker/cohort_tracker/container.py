from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_TOTAL_TEAMS
from .database.connection import DatabaseConnection, DBConfig
from .feedback.mysql_feedback_repository import MySQLFeedbackRepository
from .feedback.repository import FeedbackRepository
from .feedback.service import FeedbackService
from .logins.mysql_login_history_repository import MySQLLoginHistoryRepository
from .logins.repository import LoginHistoryRepository
from .logins.service import LoginHistoryService
from .reporting.service import AttendanceReportService
from .scheduling.model import ScheduleConfig
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import AuthService, ProfileService
from .submissions.mysql_submission_repository import MySQLSubmissionRepository
from .submissions.repository import SubmissionRepository
from .submissions.service import SubmissionService
from .weeks.mysql_week_repository import MySQLCourseWeekRepository
from .weeks.repository import CourseWeekRepository
from .weeks.service import CourseWeekService


@dataclass(frozen=True)
class Container:
    schedule: ScheduleConfig

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    submissions_repo: SubmissionRepository
    feedback_repo: FeedbackRepository
    login_history_repo: LoginHistoryRepository
    weeks_repo: CourseWeekRepository

    auth_service: AuthService
    profile_service: ProfileService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    submission_service: SubmissionService
    feedback_service: FeedbackService
    login_history_service: LoginHistoryService
    week_service: CourseWeekService


def assemble(
    *,
    schedule: ScheduleConfig,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    submissions_repo: SubmissionRepository,
    feedback_repo: FeedbackRepository,
    login_history_repo: LoginHistoryRepository,
    weeks_repo: CourseWeekRepository,
    allowed_email_domain: Optional[str] = None,
    total_teams: int = DEFAULT_TOTAL_TEAMS,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of any repository implementations."""

    return Container(
        schedule=schedule,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        submissions_repo=submissions_repo,
        feedback_repo=feedback_repo,
        login_history_repo=login_history_repo,
        weeks_repo=weeks_repo,
        auth_service=AuthService(students_repo),
        profile_service=ProfileService(students_repo, allowed_email_domain=allowed_email_domain, total_teams=total_teams),
        attendance_service=AttendanceService(attendance_repo, schedule, clock=clock),
        report_service=AttendanceReportService(attendance_repo, schedule, clock=clock),
        submission_service=SubmissionService(submissions_repo, clock=clock),
        feedback_service=FeedbackService(feedback_repo, clock=clock),
        login_history_service=LoginHistoryService(login_history_repo, clock=clock),
        week_service=CourseWeekService(weeks_repo, schedule, clock=clock),
    )


def build_container(
    *,
    db_config: dict,
    schedule: ScheduleConfig,
    allowed_email_domain: Optional[str] = None,
    total_teams: int = DEFAULT_TOTAL_TEAMS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        schedule=schedule,
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        submissions_repo=MySQLSubmissionRepository(conn),
        feedback_repo=MySQLFeedbackRepository(conn),
        login_history_repo=MySQLLoginHistoryRepository(conn),
        weeks_repo=MySQLCourseWeekRepository(conn),
        allowed_email_domain=allowed_email_domain,
        total_teams=total_teams,
    )
