from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_write, fetchall, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    """Unit-of-work over ``attendance_records``.

    Staged records stay pending after a failed save and the next save retries
    them. Writes are keyed on ``record_id``, so a retried row is written once.
    The failing record is attributed by the caller.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._pending: dict[str, AttendanceRecord] = {}

    def load_records(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, student_id, category_id, class_date, attended, justified
                FROM attendance_records
                ORDER BY class_date ASC, record_id ASC
                """
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    record_id=str(r["record_id"]),
                    student_id=int(r["student_id"]),
                    category_id=int(r["category_id"]),
                    class_date=normalize_mysql_date(r["class_date"]),
                    attended=bool(r["attended"]),
                    justified=None if r.get("justified") is None else bool(r["justified"]),
                )
                for r in rows
            ]

    def insert(self, record: AttendanceRecord) -> None:
        self._pending[record.record_id] = record

    def update(self, record: AttendanceRecord) -> None:
        self._pending[record.record_id] = record

    def save(self) -> None:
        if not self._pending:
            return

        pending = list(self._pending.values())
        with db_write(self._conn_factory, what="la asistencia") as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(record_id, student_id, category_id, class_date, attended, justified)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE attended=VALUES(attended), justified=VALUES(justified)
                """,
                [
                    (
                        r.record_id,
                        r.student_id,
                        r.category_id,
                        r.class_date,
                        1 if r.attended else 0,
                        None if r.justified is None else (1 if r.justified else 0),
                    )
                    for r in pending
                ],
            )
        self._pending.clear()
