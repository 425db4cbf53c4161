from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} no es válido")
    return value.strip()


def require_finite_amount(value, field_name: str = "Importe") -> float:
    """Accept int/float/Decimal amounts; reject bools, NaN and infinities."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError(f"{field_name} no es un número")
    amount = float(value)
    if not math.isfinite(amount):
        raise ValidationError(f"{field_name} debe ser un número finito")
    return amount


def require_positive_amount(value, field_name: str = "Importe") -> float:
    amount = require_finite_amount(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} debe ser mayor que 0")
    return amount


def parse_amount(text: str) -> float:
    """Parse user-typed amounts such as '45', '45.5' or '45,50'."""
    if text is None or not str(text).strip():
        raise ValidationError("Introduce un importe válido mayor que 0.")
    try:
        value = Decimal(str(text).strip().replace(",", "."))
    except InvalidOperation:
        raise ValidationError("Introduce un importe válido mayor que 0.") from None
    if not value.is_finite() or value <= 0:
        raise ValidationError("Introduce un importe válido mayor que 0.")
    return float(value)
