from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCalendarInput(ValidationError):
    """Raised when a (year, month) pair does not name a real calendar month."""


class NotFoundError(DomainError):
    """Raised when a referenced category, student or record does not exist."""


class PersistenceError(DomainError):
    """Raised when flushing to storage fails.

    The in-memory change has already been applied; ``record`` is the object
    that could not be written so the caller can retry or report.
    """

    def __init__(self, message: str, *, record: Optional[Any] = None):
        super().__init__(message)
        self.record = record
