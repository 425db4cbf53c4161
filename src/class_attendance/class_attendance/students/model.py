from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Entidad de dominio: alumno.

    Nota: ``student_id`` is the stable key; ``name`` is for display (and the
    fallback key of older payment rows).
    """

    student_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    category_name: Optional[str] = None
    category_id: Optional[int] = None
    is_active: bool = True
