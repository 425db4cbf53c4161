from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..categories.repository import CategoryRepository
from ..common.datetime_utils import now_local
from ..common.validators import parse_amount, require_non_empty, require_positive_amount
from ..core.constants import (
    ALL_CATEGORIES,
    DEFAULT_CASH_CONCEPT,
    DEFAULT_LATE_DAY_THRESHOLD,
    DEFAULT_MIN_ACCEPTABLE_AMOUNT,
    DEFAULT_PRICE_PER_CLASS,
)
from ..core.enums import PaymentSource, PaymentSourceFilter
from ..core.events import EventBus, PaymentRecorded
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.service import belongs_to
from .model import CardPayment, CashPayment, CategoryPaymentOverview, PaymentTotals, UnifiedPayment
from .reconciler import PaymentReconciler, describe_monthly_payment, status_tone
from .repository import PaymentLinkGateway, PaymentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentRules:
    """Host configuration for coverage and incidence."""

    price_per_class: float = DEFAULT_PRICE_PER_CLASS
    late_day_threshold: int = DEFAULT_LATE_DAY_THRESHOLD
    min_acceptable_amount: float = DEFAULT_MIN_ACCEPTABLE_AMOUNT


@dataclass(frozen=True)
class StudentBalance:
    student_id: int
    year: int
    month: int
    total_paid: float
    classes_covered: int
    plan: str


class PaymentService:
    def __init__(
        self,
        payments: PaymentRepository,
        students: StudentRepository,
        categories: CategoryRepository,
        *,
        reconciler: PaymentReconciler | None = None,
        rules: PaymentRules | None = None,
        events: EventBus | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payments = payments
        self._students = students
        self._categories = categories
        self._reconciler = reconciler or PaymentReconciler()
        self._rules = rules or PaymentRules()
        self._events = events
        self._clock = clock

    @property
    def rules(self) -> PaymentRules:
        return self._rules

    def _student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("El alumno no existe")
        return student

    def unified(self) -> list[UnifiedPayment]:
        return self._reconciler.merge(self._payments.load_card_payments(), self._payments.load_cash_payments())

    def history(
        self,
        *,
        month: int,
        year: int,
        category: Optional[str] = ALL_CATEGORIES,
        source: PaymentSourceFilter = PaymentSourceFilter.ALL,
    ) -> list[UnifiedPayment]:
        return self._reconciler.filter(self.unified(), month, year, category, source=source)

    def summary(self, payments: list[UnifiedPayment]) -> PaymentTotals:
        return self._reconciler.totals(payments)

    def history_rows(self, payments: list[UnifiedPayment]) -> list[dict]:
        """Flat rows for listing/export, with the incidence flag already computed."""

        return [
            {
                "payment_id": p.payment_id,
                "created_at": p.created_at.strftime("%Y-%m-%d %H:%M"),
                "student_name": p.student_name,
                "concept": p.concept,
                "category_name": p.category_name or "-",
                "amount": round(p.amount, 2),
                "status": p.status,
                "tone": status_tone(p.status),
                "source": p.source.value,
                "incidence": self._reconciler.has_incidence(
                    p, self._rules.late_day_threshold, self._rules.min_acceptable_amount
                ),
            }
            for p in payments
        ]

    def student_balance(self, student_id: int, *, year: int, month: int) -> StudentBalance:
        student = self._student(student_id)
        month_payments = self._reconciler.filter(self.unified(), month, year)
        total = self._reconciler.student_total(month_payments, student)
        return StudentBalance(
            student_id=student.student_id,
            year=year,
            month=month,
            total_paid=total,
            classes_covered=self._reconciler.coverage_count(total, self._rules.price_per_class),
            plan=describe_monthly_payment(total, self._clock().day),
        )

    def record_cash_payment(self, student_id: int, amount: str | float, concept: str = "") -> CashPayment:
        student = self._student(student_id)
        value = parse_amount(amount) if isinstance(amount, str) else require_positive_amount(amount)

        payment = CashPayment(
            student_id=student.student_id,
            student_name=student.name,
            amount=value,
            concept=(concept or "").strip() or DEFAULT_CASH_CONCEPT,
            category_name=student.category_name,
            created_at=self._clock(),
        )
        self._payments.insert_cash(payment)
        self._payments.save()
        logger.info("Pago en efectivo registrado: %s %.2f", student.name, value)
        self._publish(payment.payment_id, student.name, value, PaymentSource.CASH, payment.status)
        return payment

    def request_card_payment(
        self,
        student_id: int,
        *,
        concept: str,
        amount: str | float,
        gateway: PaymentLinkGateway,
    ) -> tuple[str, CardPayment]:
        """Ask the gateway for a payment link and record the pending card payment."""

        student = self._student(student_id)
        concept = require_non_empty(concept, "Concepto")
        value = parse_amount(amount) if isinstance(amount, str) else require_positive_amount(amount)

        url = gateway.create_link(student_name=student.name, concept=concept, amount=value)
        if not url:
            raise ValidationError("Error al generar el enlace")

        payment = CardPayment(
            student_id=student.student_id,
            student_name=student.name,
            amount=value,
            concept=concept,
            category_name=student.category_name,
            created_at=self._clock(),
        )
        self._payments.insert_card(payment)
        self._payments.save()
        self._publish(payment.payment_id, student.name, value, PaymentSource.CARD, payment.status)
        return url, payment

    def category_overview(self, *, month: int, year: int) -> list[CategoryPaymentOverview]:
        month_payments = self._reconciler.filter(self.unified(), month, year)
        students = list(self._students.list_all())

        out = []
        for category in sorted(self._categories.list_all(), key=lambda c: c.name.lower()):
            members = [s for s in students if belongs_to(s, category)]
            in_category = [p for p in month_payments if p.category_name == category.name]
            paid = sum(1 for s in members if self._reconciler.student_total(in_category, s) > 0)
            out.append(
                CategoryPaymentOverview(
                    category_name=category.name,
                    students_paid=paid,
                    students_total=len(members),
                    amount=sum(p.amount for p in in_category),
                )
            )
        return out

    def _publish(self, payment_id: str, student_name: str, amount: float, source: PaymentSource, status: str) -> None:
        if self._events is None:
            return
        self._events.publish(
            PaymentRecorded(payment_id=payment_id, student_name=student_name, amount=amount, source=source, status=status)
        )
