from __future__ import annotations

from typing import Sequence, Union

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_write, fetchall, fetchone
from .model import CardPayment, CashPayment
from .repository import ConceptRepository, PaymentRepository

_SHARED_COLUMNS = "payment_id, student_id, student_name, amount, status, concept, category_name, created_at"
_CONCEPTS_INITIALISED = "payment_concepts_initialised"


def _shared_fields(r: dict) -> dict:
    student_id = r.get("student_id")
    return {
        "payment_id": str(r["payment_id"]),
        "student_id": int(student_id) if student_id is not None else None,
        "student_name": r["student_name"],
        "amount": float(r["amount"]),
        "status": r["status"],
        "concept": r["concept"],
        "category_name": r.get("category_name"),
        "created_at": r["created_at"],
    }


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._pending: list[Union[CardPayment, CashPayment]] = []

    def load_card_payments(self) -> Sequence[CardPayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHARED_COLUMNS}, provider_ref FROM card_payments ORDER BY created_at DESC")
            return [CardPayment(provider_ref=r.get("provider_ref"), **_shared_fields(r)) for r in fetchall(cur)]

    def load_cash_payments(self) -> Sequence[CashPayment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SHARED_COLUMNS} FROM cash_payments ORDER BY created_at DESC")
            return [CashPayment(**_shared_fields(r)) for r in fetchall(cur)]

    def insert_card(self, payment: CardPayment) -> None:
        self._pending.append(payment)

    def insert_cash(self, payment: CashPayment) -> None:
        self._pending.append(payment)

    def save(self) -> None:
        """Write the staged payments in one transaction.

        The batch leaves the queue before writing; a failed save drops it.
        """

        if not self._pending:
            return

        pending, self._pending = self._pending, []
        with db_write(self._conn_factory, what="el pago", record=pending[-1]) as (_, cur):
            for p in pending:
                values = (
                    p.payment_id,
                    p.student_id,
                    p.student_name,
                    p.amount,
                    p.status,
                    p.concept,
                    p.category_name,
                    p.created_at,
                )
                if isinstance(p, CardPayment):
                    cur.execute(
                        f"INSERT INTO card_payments({_SHARED_COLUMNS}, provider_ref) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)",
                        values + (p.provider_ref,),
                    )
                else:
                    cur.execute(
                        f"INSERT INTO cash_payments({_SHARED_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s,%s,%s)",
                        values,
                    )


class MySQLConceptRepository(ConceptRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_names(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM payment_concepts ORDER BY concept_id ASC")
            return [r["name"] for r in fetchall(cur)]

    def add(self, name: str) -> None:
        with db_write(self._conn_factory, what="el concepto") as (_, cur):
            cur.execute("INSERT IGNORE INTO payment_concepts(name) VALUES(%s)", (name,))

    def remove(self, name: str) -> bool:
        with db_write(self._conn_factory, what="el concepto") as (_, cur):
            cur.execute("DELETE FROM payment_concepts WHERE name=%s", (name,))
            return cur.rowcount > 0

    def is_initialised(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_value FROM app_settings WHERE setting_key=%s", (_CONCEPTS_INITIALISED,))
            return fetchone(cur) is not None

    def mark_initialised(self) -> None:
        with db_write(self._conn_factory, what="el concepto") as (_, cur):
            cur.execute(
                """
                INSERT INTO app_settings(setting_key, setting_value) VALUES(%s, '1')
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                """,
                (_CONCEPTS_INITIALISED,),
            )
