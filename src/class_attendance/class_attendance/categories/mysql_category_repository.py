from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_write, fetchall, fetchone
from .model import Category
from .repository import CategoryRepository

_COLUMNS = "category_id, name, icon, order_index, weekday"


def _to_category(row: dict) -> Category:
    weekday = row.get("weekday")
    return Category(
        category_id=int(row["category_id"]),
        name=row["name"],
        icon=row.get("icon"),
        order_index=row.get("order_index"),
        weekday=Weekday(int(weekday)) if weekday else None,
    )


class MySQLCategoryRepository(CategoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, category_id: int) -> Optional[Category]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM categories WHERE category_id=%s", (int(category_id),))
            row = fetchone(cur)
            return _to_category(row) if row else None

    def get_by_name(self, name: str) -> Optional[Category]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM categories WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_category(row) if row else None

    def list_all(self) -> Sequence[Category]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM categories
                ORDER BY order_index IS NULL, order_index ASC, name ASC
                """
            )
            return [_to_category(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        icon: Optional[str] = None,
        order_index: Optional[int] = None,
        weekday: Optional[Weekday] = None,
    ) -> int:
        with db_write(self._conn_factory, what="la categoría") as (_, cur):
            cur.execute(
                """
                INSERT INTO categories(name, icon, order_index, weekday)
                VALUES(%s,%s,%s,%s)
                """,
                (name, icon, order_index, int(weekday) if weekday else None),
            )
            return int(cur.lastrowid)

    def update(self, category: Category) -> bool:
        with db_write(self._conn_factory, what="la categoría", record=category) as (_, cur):
            cur.execute(
                """
                UPDATE categories
                SET name=%s, icon=%s, order_index=%s, weekday=%s
                WHERE category_id=%s
                """,
                (
                    category.name,
                    category.icon,
                    category.order_index,
                    int(category.weekday) if category.weekday else None,
                    int(category.category_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, category_id: int) -> bool:
        with db_write(self._conn_factory, what="la categoría") as (_, cur):
            cur.execute("DELETE FROM categories WHERE category_id=%s", (int(category_id),))
            return cur.rowcount > 0
