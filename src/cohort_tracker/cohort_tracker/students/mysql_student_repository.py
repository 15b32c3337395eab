from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_db_datetime
from .model import Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT student_id, name, email, role, team, password_hash, created_at, updated_at
                FROM students
                WHERE email=%s
                """,
                (email,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Student(
                student_id=int(r["student_id"]),
                name=r["name"],
                email=r["email"],
                role=Role(r["role"]),
                team=r.get("team"),
                password_hash=r.get("password_hash"),
                created_at=from_db_datetime(r.get("created_at")),
                updated_at=from_db_datetime(r.get("updated_at")),
            )

    def create(self, *, name: str, email: str, role: Role, team: Optional[int] = None, password_hash: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, email, role, team, password_hash)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, email, role.value, team, password_hash),
            )
            return int(cur.lastrowid)

    def count_students(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students WHERE role='student'")
            r = fetchone(cur)
            return int(r["n"]) if r else 0
