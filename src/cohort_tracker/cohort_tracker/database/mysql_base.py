from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """DATETIME columns hold naive UTC; naive input is taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def from_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return pytz.utc.localize(value) if value.tzinfo is None else value


def dump_list(items) -> str:
    return json.dumps(list(items or []), ensure_ascii=False)


def load_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    loaded = json.loads(value)
    return [str(v) for v in loaded] if isinstance(loaded, list) else [str(loaded)]
