from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in before the late cutoff."""

    def decide_checkin(self, *, local_now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
