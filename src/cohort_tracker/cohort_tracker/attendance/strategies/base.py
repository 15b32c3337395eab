from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a self check-in status."""

    @abstractmethod
    def decide_checkin(self, *, local_now: datetime) -> StatusDecision:
        raise NotImplementedError
