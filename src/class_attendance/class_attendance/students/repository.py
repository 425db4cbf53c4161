from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Interfaz del repositorio de alumnos.

    Nota (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        category_name: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, student: Student) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
