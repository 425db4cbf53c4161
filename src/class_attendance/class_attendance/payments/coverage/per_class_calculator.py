from __future__ import annotations

import math

from ...common.validators import require_finite_amount, require_positive_amount
from .base import CoverageCalculator


class PerClassCoverageCalculator(CoverageCalculator):
    """Standard rule: floor(total_paid / price_per_class)."""

    def __init__(self, price_per_class: float):
        self._price = require_positive_amount(price_per_class, "Precio por clase")

    @property
    def price_per_class(self) -> float:
        return self._price

    def classes_covered(self, total_paid: float) -> int:
        total = require_finite_amount(total_paid, "Total pagado")
        return max(math.floor(total / self._price), 0)
