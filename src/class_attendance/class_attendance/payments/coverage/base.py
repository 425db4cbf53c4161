from __future__ import annotations

from abc import ABC, abstractmethod


class CoverageCalculator(ABC):
    """Calculator interface (Strategy Pattern for class coverage)."""

    @abstractmethod
    def classes_covered(self, total_paid: float) -> int:
        raise NotImplementedError
