from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_write, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, email, phone, category_name, category_id, is_active"


def _to_student(row: dict) -> Student:
    category_id = row.get("category_id")
    return Student(
        student_id=int(row["student_id"]),
        name=row["name"],
        email=row.get("email"),
        phone=row.get("phone"),
        category_name=row.get("category_name"),
        category_id=int(category_id) if category_id is not None else None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        category_name: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        with db_write(self._conn_factory, what="el alumno") as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, email, phone, category_name, category_id, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (name, email, phone, category_name, category_id),
            )
            return int(cur.lastrowid)

    def update(self, student: Student) -> bool:
        with db_write(self._conn_factory, what="el alumno", record=student) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=%s, email=%s, phone=%s, category_name=%s, category_id=%s, is_active=%s
                WHERE student_id=%s
                """,
                (
                    student.name,
                    student.email,
                    student.phone,
                    student.category_name,
                    student.category_id,
                    1 if student.is_active else 0,
                    int(student.student_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, student_id: int) -> bool:
        with db_write(self._conn_factory, what="el alumno") as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        with db_write(self._conn_factory, what="el alumno") as (_, cur):
            cur.execute(
                "UPDATE students SET is_active=%s WHERE student_id=%s",
                (1 if is_active else 0, int(student_id)),
            )
            return cur.rowcount > 0
