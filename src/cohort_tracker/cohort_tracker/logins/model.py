from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LoginMethod


@dataclass(frozen=True)
class LoginEvent:
    email: Optional[str]
    occurred_at: datetime
    success: bool
    method: LoginMethod = LoginMethod.PASSWORD
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    user_id: Optional[str] = None
    error_message: Optional[str] = None
    event_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "email": self.email,
            "timestamp": self.occurred_at.isoformat(),
            "success": self.success,
            "method": self.method.value,
            "ipAddress": self.ip_address,
            "userAgent": self.user_agent,
            "userId": self.user_id,
            "errorMessage": self.error_message,
        }


@dataclass(frozen=True)
class LoginHistoryFilter:
    email: Optional[str] = None
    success: Optional[bool] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class LoginHistoryPage:
    events: list[LoginEvent]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total

    def to_dict(self) -> dict:
        return {
            "events": [e.to_dict() for e in self.events],
            "pagination": {
                "total": self.total,
                "limit": self.limit,
                "offset": self.offset,
                "hasMore": self.has_more,
            },
        }
