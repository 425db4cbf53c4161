from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..categories.model import Category
from ..categories.repository import CategoryRepository
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository


class StudentService:
    """Use case: manage students and build category rosters."""

    def __init__(self, students: StudentRepository, categories: CategoryRepository):
        self._students = students
        self._categories = categories

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("El alumno no existe")
        return student

    def _category_for(self, category_id: Optional[int]) -> Optional[Category]:
        if category_id is None:
            return None
        category = self._categories.get_by_id(int(category_id))
        if not category:
            raise ValidationError("La categoría no existe")
        return category

    def create(
        self,
        *,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> int:
        name = require_non_empty(name, "Nombre del alumno")
        category = self._category_for(category_id)
        return self._students.create(
            name=name,
            email=(email or "").strip() or None,
            phone=(phone or "").strip() or None,
            category_name=category.name if category else None,
            category_id=category.category_id if category else None,
        )

    def update(
        self,
        student_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> Student:
        student = self.get(student_id)
        changes: dict = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "Nombre del alumno")
        if email is not None:
            changes["email"] = email.strip() or None
        if phone is not None:
            changes["phone"] = phone.strip() or None
        if category_id is not None:
            category = self._category_for(category_id)
            changes["category_id"] = category.category_id
            changes["category_name"] = category.name

        updated = replace(student, **changes)
        if not self._students.update(updated):
            raise ValidationError("No se pudo actualizar el alumno")
        return updated

    def set_active(self, student_id: int, *, is_active: bool) -> None:
        if not self._students.set_active(int(student_id), is_active=bool(is_active)):
            raise NotFoundError("El alumno no existe")

    def delete(self, student_id: int) -> None:
        if not self._students.delete_by_id(int(student_id)):
            raise NotFoundError("El alumno no existe")

    def roster(self, category: Category, *, only_active: bool = True, search: str = "") -> list[Student]:
        """Students of a category, optionally only active ones, filtered by name."""

        needle = (search or "").strip().casefold()
        out = []
        for s in self._students.list_all():
            if not belongs_to(s, category):
                continue
            if only_active and not s.is_active:
                continue
            if needle and needle not in s.name.casefold():
                continue
            out.append(s)
        out.sort(key=lambda s: s.name.casefold())
        return out


def belongs_to(student: Student, category: Category) -> bool:
    # Older rows only carry the category name.
    if student.category_id is not None:
        return student.category_id == category.category_id
    return (student.category_name or "") == category.name
