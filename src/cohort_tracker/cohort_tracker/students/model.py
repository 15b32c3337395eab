from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Student:
    """Domain entity: a cohort member or course admin.

    Note: Plain data object (no DB access code here).
    """

    student_id: int
    name: str
    email: str
    role: Role
    team: Optional[int] = None
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_profile(self) -> dict:
        return {
            "exists": True,
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "team": self.team,
        }
