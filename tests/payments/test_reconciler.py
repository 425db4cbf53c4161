from datetime import datetime

import pytest

from src.class_attendance.class_attendance.core.enums import PaymentSource, PaymentSourceFilter
from src.class_attendance.class_attendance.core.exceptions import ValidationError
from src.class_attendance.class_attendance.payments.coverage.per_class_calculator import PerClassCoverageCalculator
from src.class_attendance.class_attendance.payments.model import CardPayment, CashPayment
from src.class_attendance.class_attendance.payments.reconciler import (
    PaymentReconciler,
    describe_monthly_payment,
    status_tone,
)
from src.class_attendance.class_attendance.students.model import Student


def card(amount, when, *, name="Ana", category="Salsa Lunes", student_id=None, concept="Mensualidad"):
    return CardPayment(
        student_name=name,
        amount=amount,
        concept=concept,
        created_at=when,
        category_name=category,
        student_id=student_id,
    )


def cash(amount, when, *, name="Ana", category="Salsa Lunes", student_id=None, concept="Pago en efectivo"):
    return CashPayment(
        student_name=name,
        amount=amount,
        concept=concept,
        created_at=when,
        category_name=category,
        student_id=student_id,
    )


def test_merge_newest_first_card_before_cash_on_ties():
    card_a = card(10, datetime(2024, 1, 5), concept="A")
    card_b = card(10, datetime(2024, 1, 1), concept="B")
    cash_x = cash(10, datetime(2024, 1, 5), concept="X")

    merged = PaymentReconciler().merge([card_a, card_b], [cash_x])

    assert [p.concept for p in merged] == ["A", "X", "B"]
    assert [p.source for p in merged] == [PaymentSource.CARD, PaymentSource.CASH, PaymentSource.CARD]


def test_merge_keeps_ids_and_fields():
    payment = card(45, datetime(2024, 1, 5), student_id=7)
    (unified,) = PaymentReconciler().merge([payment], [])

    assert unified.payment_id == payment.payment_id
    assert unified.student_id == 7
    assert unified.status == "pendiente"


def test_merge_rejects_malformed_amounts():
    with pytest.raises(ValidationError):
        PaymentReconciler().merge([card(float("nan"), datetime(2024, 1, 5))], [])
    with pytest.raises(ValidationError):
        PaymentReconciler().merge([], [cash("10", datetime(2024, 1, 5))])


def test_totals_by_source():
    when = datetime(2024, 1, 1)
    merged = PaymentReconciler().merge(
        [card(10, when), card(20, when), card(30, when)],
        [cash(15, when), cash(5, when)],
    )

    totals = PaymentReconciler().totals(merged)

    assert (totals.card, totals.cash, totals.combined) == (60, 20, 80)
    assert totals.by_source == {PaymentSource.CARD: 60, PaymentSource.CASH: 20}


def test_totals_of_nothing_is_zero():
    totals = PaymentReconciler().totals([])
    assert (totals.card, totals.cash, totals.combined) == (0, 0, 0)


def test_filter_by_month_category_and_source():
    reconciler = PaymentReconciler()
    merged = reconciler.merge(
        [
            card(10, datetime(2024, 1, 3), category="Salsa Lunes"),
            card(20, datetime(2024, 2, 3), category="Salsa Lunes"),
        ],
        [
            cash(30, datetime(2024, 1, 9), category="Bachata Jueves"),
            cash(40, datetime(2023, 1, 9), category="Bachata Jueves"),
        ],
    )

    assert [p.amount for p in reconciler.filter(merged, 1, 2024)] == [30, 10]
    assert [p.amount for p in reconciler.filter(merged, 1, 2024, None)] == [30, 10]
    assert [p.amount for p in reconciler.filter(merged, 1, 2024, "Salsa Lunes")] == [10]
    assert [p.amount for p in reconciler.filter(merged, 1, 2024, source=PaymentSourceFilter.CASH)] == [30]
    assert reconciler.filter(merged, 3, 2024) == []


def test_student_total_prefers_stable_id():
    when = datetime(2024, 1, 3)
    merged = PaymentReconciler().merge(
        [card(45, when, name="Ana", student_id=1), card(15, when, name="Ana", student_id=2)],
        [cash(15, when, name="Ana", student_id=1), cash(10, when, name="Ana")],
    )
    ana = Student(student_id=1, name="Ana")

    # Id 1 rows plus the legacy row without id that carries her name.
    assert PaymentReconciler().student_total(merged, ana) == 70
    assert PaymentReconciler().student_total(merged, 2) == 15
    # By name every "Ana" counts, which is why ids are preferred.
    assert PaymentReconciler().student_total(merged, "Ana") == 85


def test_student_without_id_matches_legacy_rows_by_name():
    merged = PaymentReconciler().merge([], [cash(10, datetime(2024, 1, 3), name="Luis")])
    assert PaymentReconciler().student_total(merged, Student(student_id=3, name="Luis")) == 10


def test_coverage_count():
    reconciler = PaymentReconciler()

    assert reconciler.coverage_count(135, 15) == 9
    assert reconciler.coverage_count(10, 15) == 0
    assert reconciler.coverage_count(0, 15) == 0
    assert reconciler.coverage_count(-30, 15) == 0
    with pytest.raises(ValidationError):
        reconciler.coverage_count(30, 0)


def test_coverage_calculator_floors():
    assert PerClassCoverageCalculator(15).classes_covered(44.99) == 2
    assert PerClassCoverageCalculator(12.5).classes_covered(50) == 4


def test_incidence_late_or_short():
    reconciler = PaymentReconciler()
    (late,) = reconciler.merge([card(60, datetime(2024, 3, 6))], [])
    (short,) = reconciler.merge([], [cash(10, datetime(2024, 3, 1))])
    (fine,) = reconciler.merge([], [cash(30, datetime(2024, 3, 5))])

    assert reconciler.has_incidence(late, 5, 30)
    assert reconciler.has_incidence(short, 5, 30)
    assert not reconciler.has_incidence(fine, 5, 30)
    assert reconciler.incidences([late, short, fine], 5, 30) == [late, short]


def test_status_tone():
    assert status_tone("Pagado") == "paid"
    assert status_tone("pendiente") == "pending"
    assert status_tone("fallido") == "failed"
    assert status_tone("") == "failed"


def test_describe_monthly_payment():
    assert describe_monthly_payment(45, 3) == "Pago mensual (promo)"
    assert describe_monthly_payment(60, 5) == "Pago mensual (5 semanas)"
    assert describe_monthly_payment(45, 6) == "ninguno"
    assert describe_monthly_payment(30, 20) == "Pago mínimo"
    assert describe_monthly_payment(0, 1) == "ninguno"
