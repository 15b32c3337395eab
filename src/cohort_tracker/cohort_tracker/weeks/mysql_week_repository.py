from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, load_list
from .model import CourseWeek
from .repository import CourseWeekRepository


class MySQLCourseWeekRepository(CourseWeekRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[CourseWeek]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT week_number, title, description, published, start_date, learning_targets
                FROM course_weeks
                ORDER BY week_number ASC
                """
            )
            return [
                CourseWeek(
                    week_number=int(r["week_number"]),
                    title=r["title"],
                    description=r["description"],
                    published=bool(r["published"]),
                    start_date=r["start_date"],
                    learning_targets=tuple(load_list(r.get("learning_targets"))),
                )
                for r in fetchall(cur)
            ]
