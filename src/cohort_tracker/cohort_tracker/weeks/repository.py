from __future__ import annotations

from typing import Protocol, Sequence

from .model import CourseWeek


class CourseWeekRepository(Protocol):
    def list_all(self) -> Sequence[CourseWeek]:
        """All weeks ordered by week number."""

        raise NotImplementedError
