from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import FeedbackStatus, FeedbackType
from .model import FeedbackItem


class FeedbackRepository(Protocol):
    def list_all(self) -> Sequence[FeedbackItem]:
        raise NotImplementedError

    def get_by_id(self, feedback_id: int) -> Optional[FeedbackItem]:
        raise NotImplementedError

    def create(
        self,
        *,
        type: FeedbackType,
        title: str,
        description: str,
        submitted_by_name: str,
        submitted_by_email: str,
        page_url: Optional[str],
        created_at: datetime,
    ) -> int:
        """Insert with the author's own vote already recorded."""

        raise NotImplementedError

    def add_vote(self, feedback_id: int, email: str, *, at: datetime) -> bool:
        raise NotImplementedError

    def remove_vote(self, feedback_id: int, email: str, *, at: datetime) -> bool:
        raise NotImplementedError

    def update_admin_fields(
        self,
        feedback_id: int,
        *,
        status: Optional[FeedbackStatus],
        admin_response: Optional[str],
        at: datetime,
    ) -> bool:
        """``None`` leaves a field unchanged."""

        raise NotImplementedError
