from datetime import datetime

import mysql.connector
import pytest

from src.class_attendance.class_attendance.core.exceptions import PersistenceError
from src.class_attendance.class_attendance.payments.model import CardPayment, CashPayment
from src.class_attendance.class_attendance.payments.mysql_payment_repository import MySQLPaymentRepository
from src.class_attendance.class_attendance.payments.service import PaymentService
from src.class_attendance.class_attendance.students.model import Student


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):
        table = sql.split("INSERT INTO ", 1)[1].split("(", 1)[0]
        self._conn.staged.append((table, params))

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db
        self.staged = []

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self._db.inserted.extend(self.staged)

    def rollback(self):
        self.staged = []

    def close(self):
        pass


class FlakyDb:
    """Connection factory whose first ``down`` connects fail."""

    def __init__(self, down=0):
        self.down = down
        self.inserted = []

    def connect(self):
        if self.down:
            self.down -= 1
            raise mysql.connector.Error("Can't connect to MySQL server")
        return FakeConnection(self)


class FakeStudentsRepo:
    def __init__(self, students):
        self._students = {s.student_id: s for s in students}

    def get_by_id(self, student_id):
        return self._students.get(student_id)

    def list_all(self):
        return list(self._students.values())


class FakeCategoriesRepo:
    def list_all(self):
        return []


NOW = datetime(2025, 3, 4, 19, 30)
ANA = Student(student_id=1, name="Ana", category_name="Salsa Lunes", category_id=1)


def _cash(amount):
    return CashPayment(student_id=1, student_name="Ana", amount=amount, concept="Mensualidad", created_at=NOW)


def test_failed_save_drops_the_batch():
    db = FlakyDb(down=1)
    repo = MySQLPaymentRepository(db)
    lost = _cash(45)

    repo.insert_cash(lost)
    with pytest.raises(PersistenceError) as exc:
        repo.save()
    assert exc.value.record is lost

    kept = _cash(60)
    repo.insert_cash(kept)
    repo.save()

    assert [params[0] for _, params in db.inserted] == [kept.payment_id]


def test_save_routes_each_source_to_its_table():
    db = FlakyDb()
    repo = MySQLPaymentRepository(db)

    repo.insert_card(CardPayment(student_id=1, student_name="Ana", amount=45, concept="Mensualidad", created_at=NOW))
    repo.insert_cash(_cash(30))
    repo.save()
    repo.save()

    assert [table for table, _ in db.inserted] == ["card_payments", "cash_payments"]


def test_resubmitted_cash_payment_is_recorded_once():
    db = FlakyDb(down=1)
    service = PaymentService(
        MySQLPaymentRepository(db),
        FakeStudentsRepo([ANA]),
        FakeCategoriesRepo(),
        clock=lambda: NOW,
    )

    with pytest.raises(PersistenceError):
        service.record_cash_payment(1, "45")
    payment = service.record_cash_payment(1, "45")

    assert len(db.inserted) == 1
    table, params = db.inserted[0]
    assert table == "cash_payments"
    assert params[0] == payment.payment_id
    assert params[3] == 45
