from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass
class AttendanceRecord:
    """Entidad de dominio: asistencia de un alumno a una clase en un día.

    Mutable on purpose: the ledger updates ``attended``/``justified`` in place
    so there is only ever one object per (student, category, day).
    ``justified`` only means something when ``attended`` is False.
    """

    student_id: int
    category_id: int
    class_date: date
    attended: bool
    justified: Optional[bool] = None
    record_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def key(self) -> tuple[int, int, date]:
        return (self.student_id, self.category_id, self.class_date)


@dataclass(frozen=True)
class AttendanceSummary:
    attended_count: int
    absent_count: int


@dataclass(frozen=True)
class SessionSheetRow:
    """Read-model: one roster line of the attendance sheet for a session date."""

    student_id: int
    name: str
    attended: Optional[bool]
    justified: Optional[bool]

    @property
    def missing(self) -> bool:
        return self.attended is None
