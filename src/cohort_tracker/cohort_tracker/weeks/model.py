from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class CourseWeek:
    week_number: int
    title: str
    description: str
    published: bool
    start_date: date
    learning_targets: tuple[str, ...] = field(default_factory=tuple)
