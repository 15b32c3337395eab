from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import LATE_CHECKIN_HOUR
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_hour: int = LATE_CHECKIN_HOUR

    def for_checkin(self, *, local_now: datetime) -> AttendanceStrategy:
        if local_now.hour >= self.late_hour:
            return LateStrategy()
        return OnTimeStrategy()
