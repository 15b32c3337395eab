from __future__ import annotations

from typing import Sequence

from ..core.enums import LoginMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import LoginEvent, LoginHistoryFilter
from .repository import LoginHistoryRepository


def _like_contains(value: str) -> str:
    """LIKE pattern matching `value` literally anywhere (escape char '!')."""
    escaped = value.replace("!", "!!").replace("%", "!%").replace("_", "!_")
    return f"%{escaped}%"


def _where(criteria: LoginHistoryFilter) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []

    if criteria.email:
        # utf8mb4_unicode_ci collation makes LIKE case-insensitive.
        clauses.append("email LIKE %s ESCAPE '!'")
        params.append(_like_contains(criteria.email))
    if criteria.success is not None:
        clauses.append("success=%s")
        params.append(1 if criteria.success else 0)
    if criteria.start is not None:
        clauses.append("occurred_at >= %s")
        params.append(to_db_datetime(criteria.start))
    if criteria.end is not None:
        clauses.append("occurred_at <= %s")
        params.append(to_db_datetime(criteria.end))

    return " AND ".join(clauses), params


class MySQLLoginHistoryRepository(LoginHistoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, event: LoginEvent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO login_history
                    (email, occurred_at, success, ip_address, user_agent, method, user_id, error_message)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.email,
                    to_db_datetime(event.occurred_at),
                    1 if event.success else 0,
                    event.ip_address,
                    event.user_agent,
                    event.method.value,
                    event.user_id,
                    event.error_message,
                ),
            )
            return int(cur.lastrowid)

    def find(self, criteria: LoginHistoryFilter, *, limit: int, offset: int) -> Sequence[LoginEvent]:
        where, params = _where(criteria)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, email, occurred_at, success, ip_address, user_agent, method, user_id, error_message
                FROM login_history
                WHERE {where}
                ORDER BY occurred_at DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [
                LoginEvent(
                    event_id=int(r["event_id"]),
                    email=r.get("email"),
                    occurred_at=from_db_datetime(r["occurred_at"]),
                    success=bool(r["success"]),
                    ip_address=r.get("ip_address"),
                    user_agent=r.get("user_agent"),
                    method=LoginMethod(r["method"]),
                    user_id=r.get("user_id"),
                    error_message=r.get("error_message"),
                )
                for r in fetchall(cur)
            ]

    def count(self, criteria: LoginHistoryFilter) -> int:
        where, params = _where(criteria)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM login_history WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
