from __future__ import annotations

import re
from datetime import datetime

import pytest
import pytz

from cohort_tracker.core.enums import Role, SubmissionStatus
from cohort_tracker.core.exceptions import NotFoundError, ValidationError
from cohort_tracker.submissions.service import SubmissionService, new_submission_id
from tests.fakes import FixedClock, InMemoryStudents, InMemorySubmissions

NOW = datetime(2026, 1, 28, 15, 0, tzinfo=pytz.utc)


def _service() -> SubmissionService:
    students = InMemoryStudents()
    students.create(name="Jane Smith", email="jane@example.com", role=Role.STUDENT, team=1)
    students.create(name="Erik Larsson", email="erik@example.com", role=Role.STUDENT, team=2)
    return SubmissionService(InMemorySubmissions(students), clock=FixedClock(NOW))


def test_submission_id_format():
    assert re.fullmatch(r"\d{13}-[0-9a-f]{9}", new_submission_id(NOW))


def test_scalar_inputs_become_lists():
    svc = _service()

    sub = svc.submit("jane@example.com", title="Week 2", work_done="Built the image", status="green",
                     blockers="  ", next_steps="Push to registry", week="2")

    assert sub.work_done == ("Built the image",)
    assert sub.blockers == ()
    assert sub.next_steps == ("Push to registry",)
    assert sub.week == 2
    assert sub.status == SubmissionStatus.GREEN
    assert svc.list_own("jane@example.com") == [sub]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"title": "", "work_done": ["x"], "status": "green"},
        {"title": "T", "work_done": [], "status": "green"},
        {"title": "T", "work_done": ["x"], "status": "blue"},
        {"title": "T", "work_done": ["x"], "status": "red", "week": "two"},
    ],
)
def test_invalid_submissions_are_rejected(kwargs):
    with pytest.raises(ValidationError):
        _service().submit("jane@example.com", **kwargs)


def test_unknown_student():
    with pytest.raises(NotFoundError):
        _service().submit("nobody@example.com", title="T", work_done=["x"], status="red")


def test_admin_list_is_newest_first_with_totals():
    svc = _service()
    svc.submit("jane@example.com", title="older", work_done=["a"], status="green", now=datetime(2026, 1, 20, 9, 0, tzinfo=pytz.utc))
    svc.submit("erik@example.com", title="newest", work_done=["b"], status="yellow")
    svc.submit("jane@example.com", title="middle", work_done=["c"], status="red", now=datetime(2026, 1, 27, 9, 0, tzinfo=pytz.utc))

    listing = svc.list_all()

    assert [s["title"] for s in listing["submissions"]] == ["newest", "middle", "older"]
    assert listing["submissions"][0]["studentName"] == "Erik Larsson"
    assert listing["totalStudents"] == 2
    assert listing["totalSubmissions"] == 3
