"""Example: the core without Flask or MySQL.

Controllers are a thin layer; the rules live in the sessions, attendance and
payments packages and can be driven directly.
"""

from datetime import datetime

from src.class_attendance.class_attendance.attendance.ledger import AttendanceLedger
from src.class_attendance.class_attendance.categories.model import Category
from src.class_attendance.class_attendance.payments.model import CardPayment, CashPayment
from src.class_attendance.class_attendance.payments.reconciler import PaymentReconciler
from src.class_attendance.class_attendance.sessions.generator import ClassDateGenerator


def main():
    category = Category(category_id=1, name="Salsa Lunes")
    dates = ClassDateGenerator().generate(2025, 3, category)
    print("Clases:", [d.isoformat() for d in dates])

    ledger = AttendanceLedger()
    ledger.toggle(1, category.category_id, dates[0])
    ledger.upsert(1, category.category_id, dates[1], False, True)
    print(ledger.month_summary(1, category.category_id, 2025, 3))

    reconciler = PaymentReconciler()
    payments = reconciler.merge(
        [CardPayment(student_id=1, student_name="Ana", amount=45, concept="Mensualidad", created_at=datetime(2025, 3, 2))],
        [CashPayment(student_id=1, student_name="Ana", amount=15, concept="Clase Suelta", created_at=datetime(2025, 3, 20))],
    )
    total = reconciler.student_total(payments, 1)
    print("Total:", total, "clases cubiertas:", reconciler.coverage_count(total, 15))
    print("Incidencias:", [p.concept for p in reconciler.incidences(payments, 5, 30)])


if __name__ == "__main__":
    main()
