from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .categories.mysql_category_repository import MySQLCategoryRepository
from .categories.service import CategoryService
from .core.constants import (
    DEFAULT_LATE_DAY_THRESHOLD,
    DEFAULT_MIN_ACCEPTABLE_AMOUNT,
    DEFAULT_ON_UNKNOWN_WEEKDAY,
    DEFAULT_PRICE_PER_CLASS,
)
from .core.events import EventBus
from .database.connection import DBConfig, DatabaseConnection
from .payments.concepts import ConceptCatalog
from .payments.mysql_payment_repository import MySQLConceptRepository, MySQLPaymentRepository
from .payments.reconciler import PaymentReconciler
from .payments.repository import PaymentLinkGateway
from .payments.service import PaymentRules, PaymentService
from .sessions.generator import ClassDateGenerator
from .sessions.policies import UnknownWeekdayPolicyFactory
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    events: EventBus

    categories_repo: MySQLCategoryRepository
    students_repo: MySQLStudentRepository
    attendance_repo: MySQLAttendanceRepository
    payments_repo: MySQLPaymentRepository
    concepts_repo: MySQLConceptRepository

    ledger: AttendanceLedger
    generator: ClassDateGenerator
    reconciler: PaymentReconciler

    category_service: CategoryService
    student_service: StudentService
    payment_service: PaymentService
    attendance_service: AttendanceService
    concept_catalog: ConceptCatalog

    payment_gateway: Optional[PaymentLinkGateway] = None


def build_container(
    *,
    db_config: dict,
    price_per_class: float = DEFAULT_PRICE_PER_CLASS,
    late_day_threshold: int = DEFAULT_LATE_DAY_THRESHOLD,
    min_acceptable_amount: float = DEFAULT_MIN_ACCEPTABLE_AMOUNT,
    on_unknown_weekday: str = DEFAULT_ON_UNKNOWN_WEEKDAY,
    payment_gateway: Optional[PaymentLinkGateway] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    events = EventBus()

    categories_repo = MySQLCategoryRepository(conn)
    students_repo = MySQLStudentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    payments_repo = MySQLPaymentRepository(conn)
    concepts_repo = MySQLConceptRepository(conn)

    ledger = AttendanceLedger(attendance_repo, events=events)
    generator = ClassDateGenerator(unknown_weekday_policy=UnknownWeekdayPolicyFactory.from_setting(on_unknown_weekday))
    reconciler = PaymentReconciler()

    category_service = CategoryService(categories_repo)
    student_service = StudentService(students_repo, categories_repo)
    payment_service = PaymentService(
        payments_repo,
        students_repo,
        categories_repo,
        reconciler=reconciler,
        rules=PaymentRules(
            price_per_class=float(price_per_class),
            late_day_threshold=int(late_day_threshold),
            min_acceptable_amount=float(min_acceptable_amount),
        ),
        events=events,
    )
    attendance_service = AttendanceService(
        ledger,
        category_service,
        student_service,
        generator=generator,
        payments=payment_service,
    )

    return Container(
        conn=conn,
        events=events,
        categories_repo=categories_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        concepts_repo=concepts_repo,
        ledger=ledger,
        generator=generator,
        reconciler=reconciler,
        category_service=category_service,
        student_service=student_service,
        payment_service=payment_service,
        attendance_service=attendance_service,
        concept_catalog=ConceptCatalog(concepts_repo),
        payment_gateway=payment_gateway,
    )
