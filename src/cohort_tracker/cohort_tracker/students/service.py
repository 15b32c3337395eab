from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..common.validators import require_email
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    email: str
    name: str
    role: Role
    team: Optional[int]


class AuthService:
    """Use case: authenticate a student or admin (login)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def authenticate(self, email: str, password: str) -> SessionUser:
        student = self._students.get_by_email((email or "").strip().lower())
        if not student or not student.password_hash:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(student.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(email=student.email, name=student.name, role=student.role, team=student.team)


class ProfileService:
    """Use case: look up and create student profiles."""

    def __init__(self, students: StudentRepository, *, allowed_email_domain: Optional[str] = None, total_teams: int = 8):
        self._students = students
        self._allowed_domain = (allowed_email_domain or "").lower() or None
        self._total_teams = int(total_teams)

    def get_profile(self, email: str) -> dict:
        student = self._students.get_by_email(email)
        if not student:
            # Authenticated but no profile created yet.
            return {"exists": False, "email": email, "role": None}
        return student.to_profile()

    def ensure_profile(self, email: str, *, name: Optional[str] = None, role: Optional[str] = None) -> tuple[dict, bool]:
        """Create the profile once. Returns (profile, created)."""

        email = require_email(email)
        if self._allowed_domain and not email.endswith("@" + self._allowed_domain):
            raise ValidationError(f"Only @{self._allowed_domain} addresses can sign up")

        existing = self._students.get_by_email(email)
        if existing:
            return existing.to_profile(), False

        try:
            role_value = Role(role) if role else Role.STUDENT
        except ValueError:
            raise ValidationError("Invalid role")
        if role_value == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be created from sign-up")

        name = (name or "").strip() or email.split("@")[0]
        self._students.create(name=name, email=email, role=role_value)
        logger.info("Created profile for %s", email)
        return self._students.get_by_email(email).to_profile(), True

    def course_stats(self) -> dict:
        return {"teams": self._total_teams, "students": self._students.count_students()}
