from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import DependencyFailureError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) inside one transaction.

    Commits when the block finishes, rolls back on any exception. Driver errors
    that escape the block are re-raised as DependencyFailureError so callers
    never see connector internals.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.exception("Database connection failed")
        raise DependencyFailureError("Database is unreachable") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        logger.exception("Database operation failed")
        raise DependencyFailureError("Database operation failed") from exc
    except BaseException:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed; connection will be discarded", exc_info=True)


def is_integrity_error(exc: mysql.connector.Error, errno: int) -> bool:
    return isinstance(exc, mysql.connector.IntegrityError) and getattr(exc, "errno", None) == errno


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def ping(conn_factory: DatabaseConnection) -> int:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT 1 + 1 AS result")
        return int(fetchone(cur)["result"])
