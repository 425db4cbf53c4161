from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Weekday
from ..core.exceptions import NotFoundError, ValidationError
from ..sessions.weekday_rule import weekday_for
from .model import Category
from .repository import CategoryRepository

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, categories: CategoryRepository):
        self._categories = categories

    def get(self, category_id: int) -> Category:
        category = self._categories.get_by_id(int(category_id))
        if not category:
            raise NotFoundError("La categoría no existe")
        return category

    def list_ordered(self) -> list[Category]:
        items = list(self._categories.list_all())
        items.sort(key=lambda c: (c.order_index is None, c.order_index or 0, c.name.lower()))
        return items

    def create(self, name: str, *, icon: Optional[str] = None, order_index: Optional[int] = None) -> int:
        name = require_non_empty(name, "Nombre de la categoría")
        if self._categories.get_by_name(name):
            raise ValidationError("Ya existe una categoría con ese nombre")

        weekday = weekday_for(name)
        return self._categories.create(
            name=name,
            icon=icon,
            order_index=order_index,
            weekday=weekday if weekday != Weekday.UNKNOWN else None,
        )

    def rename(self, category_id: int, new_name: str) -> Category:
        category = self.get(category_id)
        new_name = require_non_empty(new_name, "Nombre de la categoría")

        other = self._categories.get_by_name(new_name)
        if other and other.category_id != category.category_id:
            raise ValidationError("Ya existe una categoría con ese nombre")

        # Keep the stored day unless the new name names one explicitly.
        weekday = weekday_for(new_name)
        renamed = replace(
            category,
            name=new_name,
            weekday=weekday if weekday != Weekday.UNKNOWN else category.weekday,
        )
        if not self._categories.update(renamed):
            raise ValidationError("No se pudo renombrar la categoría")
        return renamed

    def set_weekday(self, category_id: int, weekday: Weekday | int) -> Category:
        try:
            weekday = Weekday(int(weekday))
        except ValueError:
            raise ValidationError("Día de la semana no válido") from None
        if weekday == Weekday.UNKNOWN:
            raise ValidationError("Día de la semana no válido")

        updated = replace(self.get(category_id), weekday=weekday)
        if not self._categories.update(updated):
            raise ValidationError("No se pudo cambiar el día de la categoría")
        return updated

    def delete(self, category_id: int) -> None:
        if not self._categories.delete(int(category_id)):
            raise NotFoundError("La categoría no existe")

    def migrate_weekdays(self) -> Sequence[Category]:
        """One-off: store the parsed weekday on categories that lack one.

        Returns the categories whose name still has no recognisable day.
        """

        unresolved: list[Category] = []
        for category in self._categories.list_all():
            if category.weekday:
                continue
            weekday = weekday_for(category.name)
            if weekday == Weekday.UNKNOWN:
                unresolved.append(category)
                continue
            self._categories.update(replace(category, weekday=weekday))
            logger.info("Categoría %r -> %s", category.name, weekday.name)
        if unresolved:
            logger.warning(
                "Categorías sin día de clase reconocible: %s",
                ", ".join(repr(c.name) for c in unresolved),
            )
        return unresolved
