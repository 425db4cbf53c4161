from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import as_day, in_month
from ..core.events import AttendanceChanged, EventBus
from ..core.exceptions import PersistenceError
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

Key = tuple[int, int, date]


class AttendanceLedger:
    """At most one attendance outcome per (student, category, day).

    The table lives in memory and is flushed through the repository after each
    change. ``upsert`` is the only place records are created, which is what
    keeps keys unique.

    Thread safety: each read-modify-write runs under one lock, so concurrent
    ``upsert``/``toggle`` calls on the same key cannot both create a record.
    Reads return the live record objects; do not mutate them from outside.

    Flush failures: the in-memory change stands. With ``raise_on_flush_error``
    (default) a PersistenceError carrying the record is raised; otherwise the
    error is logged and kept in ``last_flush_error``. AttendanceChanged is
    published either way.
    """

    def __init__(
        self,
        store: AttendanceRepository | None = None,
        *,
        events: EventBus | None = None,
        raise_on_flush_error: bool = True,
    ):
        self._store = store
        self._events = events
        self._raise_on_flush_error = bool(raise_on_flush_error)
        self._records: dict[Key, AttendanceRecord] = {}
        self._lock = threading.RLock()
        self.last_flush_error: Optional[PersistenceError] = None

    def __len__(self) -> int:
        return len(self._records)

    def reload(self) -> None:
        if self._store is None:
            return
        with self._lock:
            self._records = {}
            self._index(self._store.load_records())

    def load(self, records: Iterable[AttendanceRecord]) -> None:
        with self._lock:
            self._index(records)

    def _index(self, records: Iterable[AttendanceRecord]) -> None:
        for record in records:
            record.class_date = as_day(record.class_date)
            if record.key in self._records:
                logger.warning("Asistencia duplicada ignorada: %s (se conserva la primera)", record.key)
                continue
            self._records[record.key] = record

    def find(self, student_id: int, category_id: int, day: date | datetime) -> Optional[AttendanceRecord]:
        return self._records.get((int(student_id), int(category_id), as_day(day)))

    def upsert(
        self,
        student_id: int,
        category_id: int,
        day: date | datetime,
        attended: bool,
        justified: Optional[bool] = None,
    ) -> AttendanceRecord:
        with self._lock:
            record = self.find(student_id, category_id, day)
            created = record is None
            if record is None:
                record = AttendanceRecord(
                    student_id=int(student_id),
                    category_id=int(category_id),
                    class_date=as_day(day),
                    attended=bool(attended),
                    justified=justified,
                )
                self._records[record.key] = record
            else:
                record.attended = bool(attended)
                record.justified = justified
            try:
                self._flush(record, created=created)
            except PersistenceError:
                self._publish(record, created=created)
                raise
        self._publish(record, created=created)
        return record

    def toggle(self, student_id: int, category_id: int, day: date | datetime) -> AttendanceRecord:
        """Flip an existing outcome; a missing one is created as present."""

        with self._lock:
            record = self.find(student_id, category_id, day)
            if record is None:
                return self.upsert(student_id, category_id, day, True)
            return self.upsert(student_id, category_id, day, not record.attended, record.justified)

    def records_for_month(self, student_id: int, category_id: int, year: int, month: int) -> list[AttendanceRecord]:
        items = [
            r
            for r in self._records.values()
            if r.student_id == int(student_id) and r.category_id == int(category_id) and in_month(r.class_date, year, month)
        ]
        items.sort(key=lambda r: r.class_date)
        return items

    def month_summary(self, student_id: int, category_id: int, year: int, month: int) -> AttendanceSummary:
        records = self.records_for_month(student_id, category_id, year, month)
        attended = sum(1 for r in records if r.attended)
        return AttendanceSummary(attended_count=attended, absent_count=len(records) - attended)

    def _flush(self, record: AttendanceRecord, *, created: bool) -> None:
        if self._store is None:
            return

        if created:
            self._store.insert(record)
        else:
            self._store.update(record)

        try:
            self._store.save()
        except PersistenceError as e:
            e.record = record
            self.last_flush_error = e
            if self._raise_on_flush_error:
                raise
            logger.warning("Error guardando asistencia %s: %s", record.key, e)
            return

        self.last_flush_error = None
        logger.debug("Asistencia guardada %s -> %s", record.key, record.attended)

    def _publish(self, record: AttendanceRecord, *, created: bool) -> None:
        if self._events is None:
            return
        self._events.publish(
            AttendanceChanged(
                student_id=record.student_id,
                category_id=record.category_id,
                class_date=record.class_date,
                attended=record.attended,
                justified=record.justified,
                created=created,
            )
        )
