from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Weekday


@dataclass(frozen=True)
class Category:
    """Entidad de dominio: categoría de clase recurrente (p. ej. "Clase Lunes").

    ``weekday`` is stored at creation time; when it is None (rows created
    before the column existed) the weekday is parsed from ``name``.
    """

    category_id: int
    name: str
    icon: Optional[str] = None
    order_index: Optional[int] = None
    weekday: Optional[Weekday] = None
