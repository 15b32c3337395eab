from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from cohort_tracker.core.enums import Role
from cohort_tracker.core.exceptions import AuthenticationError, ValidationError
from cohort_tracker.students.service import AuthService, ProfileService
from tests.fakes import InMemoryStudents


def _students() -> InMemoryStudents:
    repo = InMemoryStudents()
    repo.create(name="Jane Smith", email="jane@example.com", role=Role.STUDENT, team=3,
                password_hash=generate_password_hash("secret"))
    repo.create(name="Placeholder", email="ghost@example.com", role=Role.STUDENT, password_hash="not-a-hash")
    return repo


def test_authenticate_success():
    user = AuthService(_students()).authenticate(" Jane@Example.com ", "secret")

    assert user.email == "jane@example.com"
    assert user.role == Role.STUDENT
    assert user.team == 3


@pytest.mark.parametrize(
    "email, password",
    [("jane@example.com", "wrong"), ("nobody@example.com", "secret"), ("ghost@example.com", "x")],
)
def test_authenticate_failures_share_one_message(email, password):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        AuthService(_students()).authenticate(email, password)


def test_get_profile_for_unknown_email():
    assert ProfileService(_students()).get_profile("new@example.com") == {
        "exists": False,
        "email": "new@example.com",
        "role": None,
    }


def test_ensure_profile_creates_once_with_defaults():
    svc = ProfileService(_students())

    profile, created = svc.ensure_profile("Anna.Berg@example.com")
    again, created_again = svc.ensure_profile("anna.berg@example.com", name="Someone Else")

    assert created is True
    assert created_again is False
    assert profile["name"] == "anna.berg"
    assert profile["role"] == "student"
    assert again == profile


def test_ensure_profile_enforces_allowed_domain():
    svc = ProfileService(_students(), allowed_email_domain="school.se")

    with pytest.raises(ValidationError):
        svc.ensure_profile("anna@example.com")
    assert svc.ensure_profile("anna@school.se")[1] is True


def test_ensure_profile_refuses_admin_role():
    with pytest.raises(ValidationError):
        ProfileService(_students()).ensure_profile("boss@example.com", role="admin")


def test_course_stats_counts_students_only():
    repo = _students()
    repo.create(name="Admin", email="admin@example.com", role=Role.ADMIN)

    assert ProfileService(repo, total_teams=8).course_stats() == {"teams": 8, "students": 2}
