from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import PaymentSource, PaymentStatus


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class CardPayment:
    """Pago con tarjeta originado por un enlace de pago (empieza "pendiente")."""

    student_name: str
    amount: float
    concept: str
    created_at: datetime
    status: str = PaymentStatus.PENDING.value
    category_name: Optional[str] = None
    student_id: Optional[int] = None
    provider_ref: Optional[str] = None
    payment_id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class CashPayment:
    """Pago en efectivo registrado a mano (empieza "pagado")."""

    student_name: str
    amount: float
    concept: str
    created_at: datetime
    status: str = PaymentStatus.PAID.value
    category_name: Optional[str] = None
    student_id: Optional[int] = None
    payment_id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class UnifiedPayment:
    """Card or cash payment in one shape, tagged with where it came from."""

    payment_id: str
    student_name: str
    amount: float
    status: str
    concept: str
    category_name: Optional[str]
    created_at: datetime
    source: PaymentSource
    student_id: Optional[int] = None

    @classmethod
    def from_card(cls, p: CardPayment) -> "UnifiedPayment":
        return cls._from(p, PaymentSource.CARD)

    @classmethod
    def from_cash(cls, p: CashPayment) -> "UnifiedPayment":
        return cls._from(p, PaymentSource.CASH)

    @classmethod
    def _from(cls, p, source: PaymentSource) -> "UnifiedPayment":
        return cls(
            payment_id=p.payment_id,
            student_name=p.student_name,
            amount=p.amount,
            status=p.status,
            concept=p.concept,
            category_name=p.category_name,
            created_at=p.created_at,
            source=source,
            student_id=p.student_id,
        )


@dataclass(frozen=True)
class PaymentTotals:
    card: float
    cash: float
    combined: float

    @property
    def by_source(self) -> dict[PaymentSource, float]:
        return {PaymentSource.CARD: self.card, PaymentSource.CASH: self.cash}


@dataclass(frozen=True)
class CategoryPaymentOverview:
    """Read-model for the monthly overview: who paid in each category."""

    category_name: str
    students_paid: int
    students_total: int
    amount: float
