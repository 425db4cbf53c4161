from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Persistence collaborator of the attendance ledger.

    ``insert``/``update`` only stage changes; ``save`` flushes them and raises
    PersistenceError when storage fails. Durability is the repository's job.
    """

    def load_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def save(self) -> None:
        raise NotImplementedError
