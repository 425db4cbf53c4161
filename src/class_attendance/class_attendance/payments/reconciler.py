from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence, Union

from ..common.validators import require_finite_amount
from ..core.constants import (
    ALL_CATEGORIES,
    MINIMUM_PLAN_AMOUNT,
    MONTHLY_FIVE_WEEKS_AMOUNT,
    MONTHLY_PROMO_AMOUNT,
    PLAN_WINDOW_LAST_DAY,
)
from ..core.enums import PaymentSource, PaymentSourceFilter, PaymentStatus
from ..core.exceptions import ValidationError
from ..students.model import Student
from .coverage.per_class_calculator import PerClassCoverageCalculator
from .model import CardPayment, CashPayment, PaymentTotals, UnifiedPayment

StudentRef = Union[Student, int, str]


def _check(payment) -> None:
    require_finite_amount(payment.amount)
    if not isinstance(payment.created_at, datetime):
        raise ValidationError("Fecha de pago no válida")


class PaymentReconciler:
    """Pure transformations over card and cash payments.

    Nothing here touches storage; malformed amounts or dates raise ValidationError.
    """

    def merge(self, card_payments: Iterable[CardPayment], cash_payments: Iterable[CashPayment]) -> list[UnifiedPayment]:
        """Newest first. Equal timestamps keep input order, card before cash."""

        unified: list[UnifiedPayment] = []
        for p in card_payments:
            _check(p)
            unified.append(UnifiedPayment.from_card(p))
        for p in cash_payments:
            _check(p)
            unified.append(UnifiedPayment.from_cash(p))

        # sorted() is stable, also with reverse=True.
        return sorted(unified, key=lambda p: p.created_at, reverse=True)

    def filter(
        self,
        payments: Iterable[UnifiedPayment],
        month: int,
        year: int,
        category: Optional[str] = ALL_CATEGORIES,
        *,
        source: PaymentSourceFilter = PaymentSourceFilter.ALL,
    ) -> list[UnifiedPayment]:
        all_categories = category is None or category == ALL_CATEGORIES
        source = PaymentSourceFilter(source)

        out = []
        for p in payments:
            if p.created_at.year != year or p.created_at.month != month:
                continue
            if not all_categories and p.category_name != category:
                continue
            if source != PaymentSourceFilter.ALL and p.source.value != source.value:
                continue
            out.append(p)
        return out

    def totals(self, payments: Iterable[UnifiedPayment]) -> PaymentTotals:
        card = 0.0
        cash = 0.0
        for p in payments:
            amount = require_finite_amount(p.amount)
            if p.source == PaymentSource.CARD:
                card += amount
            else:
                cash += amount
        return PaymentTotals(card=card, cash=cash, combined=card + cash)

    def student_total(self, payments: Iterable[UnifiedPayment], student: StudentRef) -> float:
        return sum(require_finite_amount(p.amount) for p in payments if _references(p, student))

    def coverage_count(self, total_paid: float, price_per_class: float) -> int:
        return PerClassCoverageCalculator(price_per_class).classes_covered(total_paid)

    def has_incidence(self, payment: UnifiedPayment, late_day_threshold: int, min_amount: float) -> bool:
        """Late (paid after the threshold day) or below the minimum amount."""

        _check(payment)
        is_late = payment.created_at.day > int(late_day_threshold)
        is_short = payment.amount < require_finite_amount(min_amount, "Importe mínimo")
        return is_late or is_short

    def incidences(self, payments: Sequence[UnifiedPayment], late_day_threshold: int, min_amount: float) -> list[UnifiedPayment]:
        return [p for p in payments if self.has_incidence(p, late_day_threshold, min_amount)]


def _references(payment: UnifiedPayment, student: StudentRef) -> bool:
    if isinstance(student, Student):
        if payment.student_id is not None:
            return payment.student_id == student.student_id
        return payment.student_name == student.name
    if isinstance(student, int) and not isinstance(student, bool):
        return payment.student_id == student
    return payment.student_name == student


def status_tone(status: str) -> str:
    """Classify the free-form status: "paid", "pending" or "failed"."""

    value = (status or "").strip().lower()
    if value == PaymentStatus.PAID.value:
        return "paid"
    if value == PaymentStatus.PENDING.value:
        return "pending"
    return "failed"


def describe_monthly_payment(amount: float, day_of_month: int) -> str:
    """Label of the legacy monthly plans for what a student paid this month."""

    amount = require_finite_amount(amount)
    in_window = 1 <= int(day_of_month) <= PLAN_WINDOW_LAST_DAY
    if amount == MONTHLY_PROMO_AMOUNT and in_window:
        return "Pago mensual (promo)"
    if amount == MONTHLY_FIVE_WEEKS_AMOUNT and in_window:
        return "Pago mensual (5 semanas)"
    if amount == MINIMUM_PLAN_AMOUNT:
        return "Pago mínimo"
    return "ninguno"
