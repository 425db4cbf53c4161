from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..categories.model import Category
from ..core.enums import Weekday
from ..core.exceptions import ValidationError


class UnknownWeekdayPolicy(ABC):
    """Strategy Pattern: what to do when a category name has no weekday word."""

    @abstractmethod
    def weekday_for_unknown(self, category: Category) -> Weekday:
        raise NotImplementedError


class EmptySessionsPolicy(UnknownWeekdayPolicy):
    """No sessions at all; the UI can ask for a clearer category name."""

    def weekday_for_unknown(self, category: Category) -> Weekday:
        return Weekday.UNKNOWN


@dataclass(frozen=True)
class DefaultDayPolicy(UnknownWeekdayPolicy):
    """Fall back to a fixed day (the old list screen used Sunday)."""

    weekday: Weekday

    def weekday_for_unknown(self, category: Category) -> Weekday:
        return self.weekday


_DEFAULT_DAY_RE = re.compile(r"^defaultday\((\d)\)$")


class UnknownWeekdayPolicyFactory:
    """Factory Pattern: build a policy from the ON_UNKNOWN_WEEKDAY setting.

    Accepted values: ``"empty"`` or ``"defaultDay(n)"`` with n an ISO weekday (1-7).
    """

    @staticmethod
    def from_setting(value: str | None) -> UnknownWeekdayPolicy:
        setting = (value or "empty").strip().lower().replace(" ", "")
        if setting == "empty":
            return EmptySessionsPolicy()

        match = _DEFAULT_DAY_RE.match(setting)
        if match and 1 <= int(match.group(1)) <= 7:
            return DefaultDayPolicy(Weekday(int(match.group(1))))

        raise ValidationError(f"ON_UNKNOWN_WEEKDAY no válido: {value!r}")
