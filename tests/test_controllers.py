from datetime import datetime

import pytest
from flask import Flask

from src.class_attendance.class_attendance.attendance.controller import register as register_attendance
from src.class_attendance.class_attendance.attendance.ledger import AttendanceLedger
from src.class_attendance.class_attendance.attendance.service import AttendanceService
from src.class_attendance.class_attendance.categories.controller import register as register_categories
from src.class_attendance.class_attendance.categories.model import Category
from src.class_attendance.class_attendance.categories.service import CategoryService
from src.class_attendance.class_attendance.container import Container
from src.class_attendance.class_attendance.core.events import EventBus
from src.class_attendance.class_attendance.core.exceptions import PersistenceError
from src.class_attendance.class_attendance.payments.concepts import ConceptCatalog
from src.class_attendance.class_attendance.payments.controller import register as register_payments
from src.class_attendance.class_attendance.payments.reconciler import PaymentReconciler
from src.class_attendance.class_attendance.payments.service import PaymentService
from src.class_attendance.class_attendance.sessions.generator import ClassDateGenerator
from src.class_attendance.class_attendance.students.controller import register as register_students
from src.class_attendance.class_attendance.students.model import Student
from src.class_attendance.class_attendance.students.service import StudentService


class FakeCategoriesRepo:
    def __init__(self, categories):
        self._items = {c.category_id: c for c in categories}

    def get_by_id(self, category_id):
        return self._items.get(category_id)

    def get_by_name(self, name):
        return next((c for c in self._items.values() if c.name == name), None)

    def list_all(self):
        return list(self._items.values())


class FakeStudentsRepo:
    def __init__(self, students):
        self._items = {s.student_id: s for s in students}

    def get_by_id(self, student_id):
        return self._items.get(student_id)

    def list_all(self):
        return list(self._items.values())


class FakePaymentsRepo:
    def __init__(self):
        self.cash = []
        self._pending = []
        self.fail = False

    def load_card_payments(self):
        return []

    def load_cash_payments(self):
        return list(self.cash)

    def insert_cash(self, payment):
        self._pending.append(payment)

    def save(self):
        if self.fail:
            raise PersistenceError("No se pudo guardar el pago")
        self.cash.extend(self._pending)
        self._pending = []


class FakeConceptsRepo:
    def list_names(self):
        return []

    def is_initialised(self):
        return False


@pytest.fixture
def payments_repo():
    return FakePaymentsRepo()


@pytest.fixture
def client(payments_repo):
    categories_repo = FakeCategoriesRepo([Category(category_id=1, name="Salsa Lunes")])
    students_repo = FakeStudentsRepo([Student(student_id=1, name="Ana", category_id=1, category_name="Salsa Lunes")])
    ledger = AttendanceLedger()
    category_service = CategoryService(categories_repo)
    student_service = StudentService(students_repo, categories_repo)
    payment_service = PaymentService(
        payments_repo, students_repo, categories_repo, clock=lambda: datetime(2025, 3, 4, 19, 0)
    )
    container = Container(
        conn=None,
        events=EventBus(),
        categories_repo=categories_repo,
        students_repo=students_repo,
        attendance_repo=None,
        payments_repo=payments_repo,
        concepts_repo=None,
        ledger=ledger,
        generator=ClassDateGenerator(),
        reconciler=PaymentReconciler(),
        category_service=category_service,
        student_service=student_service,
        payment_service=payment_service,
        attendance_service=AttendanceService(ledger, category_service, student_service, payments=payment_service),
        concept_catalog=ConceptCatalog(FakeConceptsRepo()),
    )

    app = Flask(__name__)
    for register in (register_categories, register_students, register_attendance, register_payments):
        register(app, container)
    return app.test_client()


def test_sheet_and_toggle(client):
    res = client.get("/api/categories/1/sheet?year=2025&month=3&date=2025-03-10")
    assert res.status_code == 200
    assert res.get_json()["data"]["rows"][0]["missing"] is True

    res = client.post("/api/attendance/toggle", json={"student_id": 1, "category_id": 1, "date": "2025-03-10"})
    assert res.status_code == 200
    assert res.get_json()["data"]["attended"] is True


def test_error_mapping(client):
    assert client.get("/api/categories/9/sheet?year=2025&month=3").status_code == 404

    res = client.get("/api/categories/1/sheet?year=2025&month=3&date=2025-03-11")
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    assert client.get("/api/categories/1/sessions?year=2025&month=13").status_code == 400
    assert client.post("/api/attendance/toggle", json={"category_id": 1, "date": "2025-03-10"}).status_code == 400


def test_cash_payment_and_history(client, payments_repo):
    res = client.post("/api/payments/cash", json={"student_id": 1, "amount": "45,5"})
    assert res.status_code == 201
    assert res.get_json()["data"]["concept"] == "Pago en efectivo"

    res = client.get("/api/payments?year=2025&month=3")
    body = res.get_json()
    assert body["totals"] == {"card": 0.0, "cash": 45.5, "combined": 45.5}
    assert body["data"][0]["student_name"] == "Ana"

    csv_res = client.get("/api/payments.csv?year=2025&month=3")
    assert csv_res.mimetype == "text/csv"
    assert "Ana" in csv_res.get_data().decode("utf-8-sig")


def test_persistence_error_is_503(client, payments_repo):
    payments_repo.fail = True
    res = client.post("/api/payments/cash", json={"student_id": 1, "amount": "15"})
    assert res.status_code == 503


def test_card_payment_without_gateway(client):
    res = client.post("/api/payments/card", json={"student_id": 1, "concept": "Mensualidad", "amount": 45})
    assert res.status_code == 503


def test_concepts_default_list(client):
    assert client.get("/api/payment-concepts").get_json()["data"][0] == "Mensualidad"
