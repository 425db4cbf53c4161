from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..categories.model import Category
from ..categories.service import CategoryService
from ..common.datetime_utils import as_day
from ..core.exceptions import ValidationError
from ..payments.service import PaymentService
from ..sessions.generator import ClassDateGenerator, default_session_date, is_session_date
from ..students.model import Student
from ..students.service import StudentService
from .ledger import AttendanceLedger
from .model import AttendanceRecord, AttendanceSummary, SessionSheetRow


@dataclass(frozen=True)
class SessionSheet:
    category: Category
    class_date: date
    session_dates: list[date]
    rows: list[SessionSheetRow]

    @property
    def missing_count(self) -> int:
        return sum(1 for r in self.rows if r.missing)


@dataclass(frozen=True)
class StudentMonthDetail:
    student: Student
    category: Category
    year: int
    month: int
    summary: AttendanceSummary
    records: list[AttendanceRecord]
    total_paid: float
    classes_covered: int


class AttendanceService:
    """Use cases around the attendance sheet and the per-student detail view."""

    def __init__(
        self,
        ledger: AttendanceLedger,
        categories: CategoryService,
        students: StudentService,
        *,
        generator: ClassDateGenerator | None = None,
        payments: PaymentService | None = None,
    ):
        self._ledger = ledger
        self._categories = categories
        self._students = students
        self._generator = generator or ClassDateGenerator()
        self._payments = payments

    def session_dates(self, category_id: int, year: int, month: int) -> list[date]:
        return self._generator.generate(year, month, self._categories.get(category_id))

    def default_date(self, category_id: int, year: int, month: int, today: date) -> Optional[date]:
        return default_session_date(self.session_dates(category_id, year, month), today)

    def session_sheet(
        self,
        category_id: int,
        year: int,
        month: int,
        class_date: date,
        *,
        only_active: bool = True,
        search: str = "",
    ) -> SessionSheet:
        category = self._categories.get(category_id)
        dates = self._generator.generate(year, month, category)
        class_date = as_day(class_date)
        if not is_session_date(dates, class_date):
            raise ValidationError(f"{class_date.isoformat()} no es un día de clase de {category.name}")

        rows = []
        for student in self._students.roster(category, only_active=only_active, search=search):
            record = self._ledger.find(student.student_id, category.category_id, class_date)
            rows.append(
                SessionSheetRow(
                    student_id=student.student_id,
                    name=student.name,
                    attended=record.attended if record else None,
                    justified=record.justified if record else None,
                )
            )
        return SessionSheet(category=category, class_date=class_date, session_dates=dates, rows=rows)

    def toggle(self, student_id: int, category_id: int, class_date: date) -> AttendanceRecord:
        self._check_refs(student_id, category_id)
        return self._ledger.toggle(student_id, category_id, class_date)

    def mark_present(self, student_id: int, category_id: int, class_date: date) -> AttendanceRecord:
        self._check_refs(student_id, category_id)
        return self._ledger.upsert(student_id, category_id, class_date, True, None)

    def mark_absent(self, student_id: int, category_id: int, class_date: date) -> AttendanceRecord:
        self._check_refs(student_id, category_id)
        return self._ledger.upsert(student_id, category_id, class_date, False, False)

    def set_justified(self, student_id: int, category_id: int, class_date: date, justified: bool) -> AttendanceRecord:
        record = self._ledger.find(student_id, category_id, class_date)
        if record is None or record.attended:
            raise ValidationError("Solo se puede justificar una falta")
        return self._ledger.upsert(student_id, category_id, class_date, False, bool(justified))

    def student_month_detail(self, student_id: int, category_id: int, year: int, month: int) -> StudentMonthDetail:
        student = self._students.get(student_id)
        category = self._categories.get(category_id)

        total_paid = 0.0
        classes_covered = 0
        if self._payments is not None:
            balance = self._payments.student_balance(student.student_id, year=year, month=month)
            total_paid = balance.total_paid
            classes_covered = balance.classes_covered

        return StudentMonthDetail(
            student=student,
            category=category,
            year=year,
            month=month,
            summary=self._ledger.month_summary(student.student_id, category.category_id, year, month),
            records=self._ledger.records_for_month(student.student_id, category.category_id, year, month),
            total_paid=total_paid,
            classes_covered=classes_covered,
        )

    def _check_refs(self, student_id: int, category_id: int) -> None:
        self._students.get(student_id)
        self._categories.get(category_id)
