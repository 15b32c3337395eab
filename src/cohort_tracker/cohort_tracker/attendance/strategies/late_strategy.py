from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, local_now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT_LATE)
