from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import FeedbackStatus, FeedbackType


@dataclass(frozen=True)
class FeedbackItem:
    """Domain entity: a bug report or feature request with its votes."""

    feedback_id: int
    type: FeedbackType
    title: str
    description: str
    status: FeedbackStatus
    submitted_by_name: str
    submitted_by_email: str
    created_at: datetime
    updated_at: datetime
    votes: frozenset[str] = field(default_factory=frozenset)
    page_url: Optional[str] = None
    admin_response: Optional[str] = None

    @property
    def vote_count(self) -> int:
        return len(self.votes)

    def to_dict(self) -> dict:
        return {
            "id": self.feedback_id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "submittedBy": {"name": self.submitted_by_name, "email": self.submitted_by_email},
            "votes": sorted(self.votes),
            "voteCount": self.vote_count,
            "pageUrl": self.page_url,
            "adminResponse": self.admin_response,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
