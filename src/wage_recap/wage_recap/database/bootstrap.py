from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection

log = logging.getLogger(__name__)

_STATEMENT_END = re.compile(r";\s*$", re.MULTILINE)
_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema file on statement-terminating semicolons (one per line end).

    CREATE DATABASE / USE lines are dropped so the file works with any DB name.
    """

    sql = _CREATE_DB_OR_USE.sub("", sql)
    for chunk in _STATEMENT_END.split(sql):
        stmt = chunk.strip()
        if stmt and not all(line.strip().startswith("--") for line in stmt.splitlines() if line.strip()):
            yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Apply an idempotent schema file (CREATE TABLE IF NOT EXISTS ...).

    Returns the number of statements executed.
    """

    ensure_database_exists(conn_factory)
    statements = list(iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    log.info("schema %s applied (%d statements)", schema_path, len(statements))
    return len(statements)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(str(row[0]) for row in cur.fetchall())
    finally:
        conn.close()
