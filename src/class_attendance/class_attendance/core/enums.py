from __future__ import annotations

from enum import Enum, IntEnum


class Weekday(IntEnum):
    """Día de clase en numeración ISO (lunes=1 ... domingo=7).

    UNKNOWN (0) means the category name carries no recognised weekday word.
    """

    UNKNOWN = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class PaymentSource(str, Enum):
    """Origen de un pago unificado."""

    CARD = "card"
    CASH = "cash"


class PaymentSourceFilter(str, Enum):
    ALL = "all"
    CARD = "card"
    CASH = "cash"


class PaymentStatus(str, Enum):
    """Estados conocidos; the stored status stays a free-form string."""

    PAID = "pagado"
    PENDING = "pendiente"
    FAILED = "fallido"
