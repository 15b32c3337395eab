from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..attendance.model import AttendanceRecord


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced student, item or record does not exist."""


class AlreadyCheckedIn(ValidationError):
    """Raised on a second self check-in for the same day.

    Carries the record already stored so callers can show it.
    """

    def __init__(self, existing: "AttendanceRecord"):
        super().__init__("Already checked in today")
        self.existing = existing


class InvalidDateRange(ValidationError):
    """Raised when a report range ends before it starts."""

    def __init__(self, start, end):
        super().__init__(f"Invalid date range: {end} is before {start}")
        self.start = start
        self.end = end
