from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import FeedbackStatus, FeedbackType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import FeedbackItem
from .repository import FeedbackRepository

_COLUMNS = """
    f.feedback_id, f.type, f.title, f.description, f.status,
    f.submitted_by_name, f.submitted_by_email, f.page_url, f.admin_response,
    f.created_at, f.updated_at
"""


class MySQLFeedbackRepository(FeedbackRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_item(r: dict, votes: frozenset[str]) -> FeedbackItem:
        return FeedbackItem(
            feedback_id=int(r["feedback_id"]),
            type=FeedbackType(r["type"]),
            title=r["title"],
            description=r["description"],
            status=FeedbackStatus(r["status"]),
            submitted_by_name=r["submitted_by_name"],
            submitted_by_email=r["submitted_by_email"],
            page_url=r.get("page_url"),
            admin_response=r.get("admin_response"),
            created_at=from_db_datetime(r["created_at"]),
            updated_at=from_db_datetime(r["updated_at"]),
            votes=votes,
        )

    def list_all(self) -> Sequence[FeedbackItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM feedback f ORDER BY f.vote_count DESC, f.created_at DESC")
            items = fetchall(cur)
            cur.execute("SELECT feedback_id, email FROM feedback_votes")
            votes: dict[int, set[str]] = {}
            for v in fetchall(cur):
                votes.setdefault(int(v["feedback_id"]), set()).add(v["email"])

        return [self._to_item(r, frozenset(votes.get(int(r["feedback_id"]), ()))) for r in items]

    def get_by_id(self, feedback_id: int) -> Optional[FeedbackItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM feedback f WHERE f.feedback_id=%s", (int(feedback_id),))
            r = fetchone(cur)
            if not r:
                return None
            cur.execute("SELECT email FROM feedback_votes WHERE feedback_id=%s", (int(feedback_id),))
            votes = frozenset(v["email"] for v in fetchall(cur))
        return self._to_item(r, votes)

    def create(
        self,
        *,
        type: FeedbackType,
        title: str,
        description: str,
        submitted_by_name: str,
        submitted_by_email: str,
        page_url: Optional[str],
        created_at: datetime,
    ) -> int:
        at = to_db_datetime(created_at)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO feedback
                    (type, title, description, status, submitted_by_name, submitted_by_email,
                     vote_count, page_url, created_at, updated_at)
                VALUES (%s,%s,%s,%s,%s,%s,1,%s,%s,%s)
                """,
                (type.value, title, description, FeedbackStatus.NEW.value, submitted_by_name,
                 submitted_by_email, page_url, at, at),
            )
            feedback_id = int(cur.lastrowid)
            cur.execute(
                "INSERT INTO feedback_votes(feedback_id, email) VALUES (%s,%s)",
                (feedback_id, submitted_by_email),
            )
            return feedback_id

    def add_vote(self, feedback_id: int, email: str, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT IGNORE INTO feedback_votes(feedback_id, email) VALUES (%s,%s)", (int(feedback_id), email))
            if cur.rowcount == 0:
                return False
            cur.execute(
                "UPDATE feedback SET vote_count=vote_count+1, updated_at=%s WHERE feedback_id=%s",
                (to_db_datetime(at), int(feedback_id)),
            )
            return True

    def remove_vote(self, feedback_id: int, email: str, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM feedback_votes WHERE feedback_id=%s AND email=%s", (int(feedback_id), email))
            if cur.rowcount == 0:
                return False
            cur.execute(
                "UPDATE feedback SET vote_count=GREATEST(vote_count-1, 0), updated_at=%s WHERE feedback_id=%s",
                (to_db_datetime(at), int(feedback_id)),
            )
            return True

    def update_admin_fields(
        self,
        feedback_id: int,
        *,
        status: Optional[FeedbackStatus],
        admin_response: Optional[str],
        at: datetime,
    ) -> bool:
        sets = ["updated_at=%s"]
        params: list[object] = [to_db_datetime(at)]
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        if admin_response is not None:
            sets.append("admin_response=%s")
            params.append(admin_response)
        params.append(int(feedback_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE feedback SET {', '.join(sets)} WHERE feedback_id=%s", tuple(params))
            return cur.rowcount > 0
