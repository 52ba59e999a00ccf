from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

from .connection import DatabaseConnection

log = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Yield (connection, cursor); commit on success, roll back and re-raise on error."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        log.exception("database operation failed, rolling back")
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])
