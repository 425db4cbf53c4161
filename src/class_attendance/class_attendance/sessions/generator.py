from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime
from typing import Optional, Sequence

from ..categories.model import Category
from ..common.datetime_utils import as_day
from ..core.enums import Weekday
from ..core.exceptions import InvalidCalendarInput
from .policies import EmptySessionsPolicy, UnknownWeekdayPolicy
from .weekday_rule import weekday_for


def validate_year_month(year, month) -> tuple[int, int]:
    if isinstance(year, bool) or not isinstance(year, int) or not MINYEAR <= year <= MAXYEAR:
        raise InvalidCalendarInput(f"Año no válido: {year!r}")
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidCalendarInput(f"Mes no válido: {month!r}")
    return year, month


class ClassDateGenerator:
    """Session dates of a category for one month.

    Nothing is cached: every call recomputes from the calendar, so the
    result always reflects the category as it is now.
    """

    def __init__(self, *, unknown_weekday_policy: UnknownWeekdayPolicy | None = None):
        self._policy = unknown_weekday_policy or EmptySessionsPolicy()

    def resolve_weekday(self, category: Category) -> Weekday:
        if category.weekday:
            return Weekday(category.weekday)

        weekday = weekday_for(category.name)
        if weekday == Weekday.UNKNOWN:
            return self._policy.weekday_for_unknown(category)
        return weekday

    def generate(self, year: int, month: int, category: Category) -> list[date]:
        year, month = validate_year_month(year, month)

        weekday = self.resolve_weekday(category)
        if weekday == Weekday.UNKNOWN:
            return []

        _, days_in_month = calendar.monthrange(year, month)
        days = (date(year, month, day) for day in range(1, days_in_month + 1))
        return [d for d in days if d.isoweekday() == int(weekday)]


def is_session_date(dates: Sequence[date], value: date | datetime) -> bool:
    return as_day(value) in set(dates)


def default_session_date(dates: Sequence[date], today: date) -> Optional[date]:
    """Pick the date a sheet opens on: next session from today, else the last one."""

    for d in dates:
        if d >= today:
            return d
    return dates[-1] if dates else None


def month_grid(year: int, month: int) -> list[list[Optional[int]]]:
    """Monday-first weeks of day numbers, padded with None."""

    year, month = validate_year_month(year, month)
    return [[day or None for day in week] for week in calendar.Calendar(firstweekday=0).monthdayscalendar(year, month)]
