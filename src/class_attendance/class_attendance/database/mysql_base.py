from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
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


@contextmanager
def db_write(conn_factory: DatabaseConnection, *, what: str, record: Any = None):
    """Like db_cursor, but driver failures surface as PersistenceError."""

    try:
        with db_cursor(conn_factory) as (conn, cur):
            yield conn, cur
    except mysql.connector.Error as e:
        raise PersistenceError(f"No se pudo guardar {what}: {e}", record=record) from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_date(value: Any) -> Optional[date]:
    """Normalize MySQL DATE/DATETIME values to datetime.date.

    mysql-connector can return DATE as:
    - datetime.date
    - datetime.datetime (DATETIME columns)
    - string (e.g. '2025-04-22')
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()

    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
