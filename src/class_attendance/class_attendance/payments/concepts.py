from __future__ import annotations

from ..core.constants import DEFAULT_CONCEPTS
from .repository import ConceptRepository


class ConceptCatalog:
    """Reusable payment concepts ("Mensualidad", "Clase Suelta", ...).

    Until the first edit the catalogue is the built-in defaults. After that the
    stored list is authoritative, including when every concept was removed.
    """

    def __init__(self, concepts: ConceptRepository):
        self._concepts = concepts

    def list(self) -> list[str]:
        if not self._concepts.is_initialised():
            return list(DEFAULT_CONCEPTS)
        return list(self._concepts.list_names())

    def add(self, name: str) -> bool:
        """Returns False for blanks and duplicates."""

        name = (name or "").strip()
        if not name or name in self.list():
            return False
        self._ensure_stored()
        self._concepts.add(name)
        return True

    def remove(self, name: str) -> bool:
        self._ensure_stored()
        return self._concepts.remove(name)

    def _ensure_stored(self) -> None:
        if self._concepts.is_initialised():
            return
        for default in DEFAULT_CONCEPTS:
            self._concepts.add(default)
        self._concepts.mark_initialised()
