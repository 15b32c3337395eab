from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "admin"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    """Attendance status stored per student and date."""

    PRESENT = "present"
    PRESENT_LATE = "present-late"
    EXCUSED = "excused"
    ABSENT = "absent"
    NOT_REQUIRED = "not-required"
    PENDING = "pending"


class MarkedBy(str, Enum):
    """Provenance of an attendance record."""

    SELF = "self"
    ADMIN = "admin"
    IMPORT = "import"


class SubmissionStatus(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class FeedbackType(str, Enum):
    BUG = "bug"
    FEATURE = "feature"


class FeedbackStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    WONT_FIX = "wont-fix"


class LoginMethod(str, Enum):
    PASSWORD = "password"
    EMAIL_LINK = "email_link"
