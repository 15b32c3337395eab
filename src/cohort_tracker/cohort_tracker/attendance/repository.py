from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, RosterEntry


class AttendanceRepository(Protocol):
    def list_roster(self) -> Sequence[RosterEntry]:
        """All students with their attendance, sorted by name."""

        raise NotImplementedError

    def get_roster_entry(self, email: str) -> Optional[RosterEntry]:
        raise NotImplementedError

    def get_record(self, email: str, session_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent(self, email: str, limit: int) -> Sequence[AttendanceRecord]:
        """Latest records, returned in date order (oldest first)."""

        raise NotImplementedError

    def append_record(self, email: str, record: AttendanceRecord) -> None:
        """Insert a new record.

        Raises AlreadyCheckedIn when the student already has a record for that date.
        """

        raise NotImplementedError

    def upsert_record(self, email: str, record: AttendanceRecord) -> None:
        """Insert, or overwrite in place the record for the same date (admin corrections)."""

        raise NotImplementedError
