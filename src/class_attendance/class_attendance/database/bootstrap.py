from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..sessions.weekday_rule import weekday_for
from .connection import DBConfig


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' that sit outside quoted strings."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            buf.pop()
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


DEMO_CATEGORIES = ("Clase Lunes", "Clase Miércoles", "Taller Sábado")
DEMO_STUDENTS = (
    ("Ana Pérez", "ana@example.com", "Clase Lunes"),
    ("Luis Gómez", "luis@example.com", "Clase Lunes"),
    ("Marta Ruiz", "marta@example.com", "Clase Miércoles"),
)


def ensure_demo_data(db_config: dict) -> None:
    """Insert demo categories/students if they are missing (idempotent)."""

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        category_ids: dict[str, int] = {}
        for order_index, name in enumerate(DEMO_CATEGORIES):
            cur.execute("SELECT category_id FROM categories WHERE name=%s", (name,))
            row = cur.fetchone()
            if row:
                category_ids[name] = int(row["category_id"])
                continue
            cur.execute(
                "INSERT INTO categories (name, order_index, weekday) VALUES (%s, %s, %s)",
                (name, order_index, int(weekday_for(name)) or None),
            )
            category_ids[name] = int(cur.lastrowid)

        for name, email, category_name in DEMO_STUDENTS:
            cur.execute("SELECT student_id FROM students WHERE name=%s", (name,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO students (name, email, category_name, category_id)
                VALUES (%s, %s, %s, %s)
                """,
                (name, email, category_name, category_ids.get(category_name)),
            )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


SCHEMA_TABLES = (
    "categories",
    "students",
    "attendance_records",
    "card_payments",
    "cash_payments",
    "payment_concepts",
    "app_settings",
)


def missing_tables(db_config: dict) -> list[str]:
    present = {name.lower() for name in list_tables(db_config)}
    return [name for name in SCHEMA_TABLES if name not in present]


def count_rows(db_config: dict, tables: Iterable[str] = SCHEMA_TABLES) -> dict[str, int]:
    """Row count for each of ``tables`` (trusted names, interpolated as identifiers)."""

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        counts: dict[str, int] = {}
        for table in tables:
            cur.execute(f"SELECT COUNT(*) FROM `{table}`")
            counts[table] = int(cur.fetchone()[0])
        return counts
    finally:
        conn.close()
