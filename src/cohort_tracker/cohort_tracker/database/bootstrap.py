from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


# Database name comes from settings, not from the script.
_DB_DIRECTIVE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
# One statement: quoted strings (with backslash escapes) or anything but ';'.
_STATEMENT = re.compile(r"""(?:'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|[^;'"])+""", re.S)


def _statements(script: str) -> Iterable[str]:
    lines = (line for line in script.splitlines() if not line.lstrip().startswith("--"))
    body = _DB_DIRECTIVE.sub("", "\n".join(lines))
    for match in _STATEMENT.finditer(body):
        stmt = match.group(0).strip()
        if stmt:
            yield stmt


def _run_script(conn_factory: DatabaseConnection, path: str | Path) -> None:
    script = Path(path).read_text(encoding="utf-8")
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _statements(script):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(conn_factory)
    _run_script(conn_factory, schema_path)
    logger.info("Applied %s to %s", Path(schema_path).name, conn_factory.config.describe())


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
    _run_script(conn_factory, seed_path)
    logger.info("Applied %s to %s", Path(seed_path).name, conn_factory.config.describe())


DEMO_USERS = (
    # name, email, password, role, team
    ("Course Admin", "admin@example.com", "admin123", "admin", None),
    ("Jane Smith", "jane.smith@example.com", "student123", "student", 1),
    ("Erik Larsson", "erik.larsson@example.com", "student123", "student", 2),
)


def ensure_demo_users(db_config: dict) -> None:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True, buffered=True)
        for name, email, password, role, team in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT student_id FROM students WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    "UPDATE students SET name=%s, password_hash=%s, role=%s, team=%s WHERE email=%s",
                    (name, password_hash, role, team, email),
                )
            else:
                cur.execute(
                    "INSERT INTO students (name, email, password_hash, role, team) VALUES (%s, %s, %s, %s, %s)",
                    (name, email, password_hash, role, team),
                )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
