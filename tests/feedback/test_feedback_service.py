from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from cohort_tracker.core.constants import FEEDBACK_TITLE_MAX
from cohort_tracker.core.enums import FeedbackStatus
from cohort_tracker.core.exceptions import NotFoundError, ValidationError
from cohort_tracker.feedback.service import FeedbackService
from tests.fakes import FixedClock, InMemoryFeedback


def _service() -> tuple[FeedbackService, FixedClock]:
    clock = FixedClock(datetime(2026, 1, 28, 9, 0, tzinfo=pytz.utc))
    return FeedbackService(InMemoryFeedback(), clock=clock), clock


def test_author_votes_for_own_item():
    svc, _ = _service()

    fid = svc.submit(email="jane@example.com", name="Jane", type="bug", title="Broken", description="It fails")

    item = svc.list_feedback()[0]
    assert item.feedback_id == fid
    assert item.votes == frozenset({"jane@example.com"})
    assert item.status == FeedbackStatus.NEW


def test_title_is_truncated_and_name_defaults_to_local_part():
    svc, _ = _service()

    svc.submit(email="jane@example.com", name=None, type="feature", title="x" * 300, description="d")

    item = svc.list_feedback()[0]
    assert len(item.title) == FEEDBACK_TITLE_MAX
    assert item.submitted_by_name == "jane"


def test_invalid_type_and_missing_fields():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.submit(email="a@example.com", name="A", type="question", title="t", description="d")
    with pytest.raises(ValidationError):
        svc.submit(email="a@example.com", name="A", type="bug", title=" ", description="d")


def test_toggle_vote_adds_then_removes():
    svc, _ = _service()
    fid = svc.submit(email="jane@example.com", name="Jane", type="bug", title="t", description="d")

    assert svc.toggle_vote(feedback_id=fid, email="erik@example.com") is True
    assert svc.list_feedback()[0].vote_count == 2
    assert svc.toggle_vote(feedback_id=fid, email="erik@example.com") is False
    assert svc.list_feedback()[0].vote_count == 1


def test_vote_on_missing_item():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.toggle_vote(feedback_id=99, email="erik@example.com")


def test_list_sorted_by_votes_then_newest():
    svc, clock = _service()
    old = svc.submit(email="a@example.com", name="A", type="bug", title="old", description="d")
    clock.now = datetime(2026, 1, 29, 9, 0, tzinfo=pytz.utc)
    new = svc.submit(email="b@example.com", name="B", type="bug", title="new", description="d")
    popular = svc.submit(email="c@example.com", name="C", type="feature", title="popular", description="d")
    svc.toggle_vote(feedback_id=popular, email="a@example.com")

    assert [f.feedback_id for f in svc.list_feedback()] == [popular, new, old]


def test_admin_update():
    svc, _ = _service()
    fid = svc.submit(email="jane@example.com", name="Jane", type="bug", title="t", description="d")

    svc.admin_update(feedback_id=fid, status="resolved", admin_response="Fixed in 1.2")

    item = svc.list_feedback()[0]
    assert item.status == FeedbackStatus.RESOLVED
    assert item.admin_response == "Fixed in 1.2"
    with pytest.raises(ValidationError):
        svc.admin_update(feedback_id=fid, status="done")
    with pytest.raises(NotFoundError):
        svc.admin_update(feedback_id=99, status="resolved")
