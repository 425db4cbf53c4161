from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Sequence

from .model import CardPayment, CashPayment


class PaymentRepository(Protocol):
    """Both payment sources; inserts are staged until ``save``."""

    def load_card_payments(self) -> Sequence[CardPayment]:
        raise NotImplementedError

    def load_cash_payments(self) -> Sequence[CashPayment]:
        raise NotImplementedError

    def insert_card(self, payment: CardPayment) -> None:
        raise NotImplementedError

    def insert_cash(self, payment: CashPayment) -> None:
        raise NotImplementedError

    def save(self) -> None:
        raise NotImplementedError


class ConceptRepository(Protocol):
    def list_names(self) -> Sequence[str]:
        raise NotImplementedError

    def add(self, name: str) -> None:
        raise NotImplementedError

    def remove(self, name: str) -> bool:
        raise NotImplementedError

    def is_initialised(self) -> bool:
        """True once the catalogue has been edited, even if it is now empty."""

        raise NotImplementedError

    def mark_initialised(self) -> None:
        raise NotImplementedError


class PaymentLinkGateway(Protocol):
    """External payment-link service (HTTP backend); only its contract lives here."""

    def create_link(self, *, student_name: str, concept: str, amount: Decimal | float) -> str:
        """Return the URL the student pays at."""

        raise NotImplementedError
