from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LOGIN_HISTORY_LIMIT
from ..core.enums import LoginMethod
from ..core.exceptions import ValidationError
from .model import LoginEvent, LoginHistoryFilter, LoginHistoryPage
from .repository import LoginHistoryRepository

logger = logging.getLogger(__name__)


def client_ip(headers) -> str:
    forwarded = headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return headers.get("X-Real-IP") or "Unknown"


class LoginHistoryService:
    def __init__(self, history: LoginHistoryRepository, *, clock: Callable[[], datetime] = now_local):
        self._history = history
        self._clock = clock

    def record(
        self,
        *,
        email: Optional[str],
        success: bool,
        method: str | LoginMethod = LoginMethod.PASSWORD,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        user_id: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> bool:
        """Store a login attempt. Never raises: a failed write is logged and reported as False."""

        try:
            event = LoginEvent(
                email=email,
                occurred_at=self._clock(),
                success=bool(success),
                method=LoginMethod(method or LoginMethod.PASSWORD),
                ip_address=ip_address,
                user_agent=user_agent or "Unknown",
                user_id=user_id,
                error_message=error_message,
            )
            self._history.add(event)
            return True
        except Exception:
            logger.exception("Failed to record login event for %s", email)
            return False

    def query(
        self,
        *,
        email: Optional[str] = None,
        success: Optional[bool] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int = DEFAULT_LOGIN_HISTORY_LIMIT,
        offset: int = 0,
    ) -> LoginHistoryPage:
        if limit <= 0 or offset < 0:
            raise ValidationError("limit must be positive and offset non-negative")

        criteria = LoginHistoryFilter(email=email or None, success=success, start=start, end=end)
        events = list(self._history.find(criteria, limit=limit, offset=offset))
        return LoginHistoryPage(events=events, total=self._history.count(criteria), limit=limit, offset=offset)
