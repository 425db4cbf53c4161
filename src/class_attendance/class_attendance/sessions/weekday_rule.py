"""Weekday rule: which day of the week a category meets, read from its name.

Category names conventionally carry a Spanish weekday word ("Clase Lunes",
"Taller Sábado"). New categories store the result in ``Category.weekday``;
parsing at runtime is only the fallback for rows without it.
"""
from __future__ import annotations

import logging

from ..core.enums import Weekday

logger = logging.getLogger(__name__)

# Priority order matters: "Lunes y Jueves" resolves to Monday.
_WEEKDAY_WORDS: tuple[tuple[tuple[str, ...], Weekday], ...] = (
    (("lunes",), Weekday.MONDAY),
    (("martes",), Weekday.TUESDAY),
    (("miércoles", "miercoles"), Weekday.WEDNESDAY),
    (("jueves",), Weekday.THURSDAY),
    (("viernes",), Weekday.FRIDAY),
    (("sábado", "sabado"), Weekday.SATURDAY),
    (("domingo",), Weekday.SUNDAY),
)


def weekday_for(category_name: str) -> Weekday:
    """Return the weekday named inside ``category_name`` or Weekday.UNKNOWN."""

    if not isinstance(category_name, str):
        return Weekday.UNKNOWN

    lowered = category_name.lower()
    for words, weekday in _WEEKDAY_WORDS:
        if any(word in lowered for word in words):
            return weekday

    logger.debug("No se pudo determinar el día de clase para la categoría %r", category_name)
    return Weekday.UNKNOWN
