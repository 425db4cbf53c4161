from __future__ import annotations

from datetime import date, datetime

MONTH_NAMES_ES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def as_day(value: date | datetime) -> date:
    """Drop the time of day; attendance is keyed by calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def in_month(value: date | datetime, year: int, month: int) -> bool:
    return value.year == year and value.month == month


def month_name(month: int) -> str:
    """Spanish month name (1-12); empty string outside that range."""
    if not 1 <= int(month) <= 12:
        return ""
    return MONTH_NAMES_ES[int(month) - 1]
