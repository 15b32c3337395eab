from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import Student


class StudentRepository(Protocol):
    """Repository interface for students.

    Note: the service layer depends on this interface, not on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, name: str, email: str, role: Role, team: Optional[int] = None, password_hash: Optional[str] = None) -> int:
        raise NotImplementedError

    def count_students(self) -> int:
        raise NotImplementedError
