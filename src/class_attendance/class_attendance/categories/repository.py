from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import Category


class CategoryRepository(Protocol):
    def get_by_id(self, category_id: int) -> Optional[Category]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Category]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Category]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        icon: Optional[str] = None,
        order_index: Optional[int] = None,
        weekday: Optional[Weekday] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, category: Category) -> bool:
        raise NotImplementedError

    def delete(self, category_id: int) -> bool:
        """Delete the category row only; attendance/payments are left in place."""

        raise NotImplementedError
