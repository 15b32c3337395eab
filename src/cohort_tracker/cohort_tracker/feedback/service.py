from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import FEEDBACK_DESCRIPTION_MAX, FEEDBACK_TITLE_MAX
from ..core.enums import FeedbackStatus, FeedbackType
from ..core.exceptions import NotFoundError, ValidationError
from .model import FeedbackItem
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(self, feedback: FeedbackRepository, *, clock: Callable[[], datetime] = now_local):
        self._feedback = feedback
        self._clock = clock

    def list_feedback(self) -> list[FeedbackItem]:
        """Most voted first, newest first among equals."""

        items = list(self._feedback.list_all())
        items.sort(key=lambda f: f.created_at, reverse=True)
        items.sort(key=lambda f: f.vote_count, reverse=True)
        return items

    def submit(
        self,
        *,
        email: str,
        name: Optional[str],
        type: str,
        title: str,
        description: str,
        page_url: Optional[str] = None,
    ) -> int:
        title = require_non_empty(title, "Title")[:FEEDBACK_TITLE_MAX]
        description = require_non_empty(description, "Description")[:FEEDBACK_DESCRIPTION_MAX]
        try:
            kind = FeedbackType(type)
        except ValueError:
            raise ValidationError("Invalid feedback type")

        feedback_id = self._feedback.create(
            type=kind,
            title=title,
            description=description,
            submitted_by_name=(name or "").strip() or email.split("@")[0] or "Anonymous",
            submitted_by_email=email,
            page_url=page_url or None,
            created_at=self._clock(),
        )
        logger.info("Feedback %s (%s) from %s", feedback_id, kind.value, email)
        return feedback_id

    def toggle_vote(self, *, feedback_id: int, email: str) -> bool:
        """Returns True when the caller now has a vote on the item."""

        item = self._feedback.get_by_id(feedback_id)
        if not item:
            raise NotFoundError("Feedback not found")

        now = self._clock()
        if email in item.votes:
            self._feedback.remove_vote(feedback_id, email, at=now)
            return False
        self._feedback.add_vote(feedback_id, email, at=now)
        return True

    def admin_update(self, *, feedback_id: int, status: Optional[str] = None, admin_response: Optional[str] = None) -> None:
        status_value = None
        if status:
            try:
                status_value = FeedbackStatus(status)
            except ValueError:
                raise ValidationError("Invalid feedback status")

        if not self._feedback.update_admin_fields(
            feedback_id, status=status_value, admin_response=admin_response, at=self._clock()
        ):
            raise NotFoundError("Feedback not found")
