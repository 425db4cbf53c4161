"""Domain events.

Services publish these after a successful change; the presentation layer
subscribes to show its own feedback (toasts, sounds). The core keeps no
notification flags of its own.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .enums import PaymentSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceChanged:
    student_id: int
    category_id: int
    class_date: date
    attended: bool
    justified: Optional[bool]
    created: bool


@dataclass(frozen=True)
class PaymentRecorded:
    payment_id: str
    student_name: str
    amount: float
    source: PaymentSource
    status: str


class EventBus:
    """Observer Pattern: dispatch events to subscribers by event type."""

    def __init__(self):
        self._handlers: dict[type, list[Callable[[object], None]]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Callable[[object], None]) -> None:
        self._handlers[event_type].append(handler)

    def publish(self, event: object) -> None:
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                # The change is already applied; log and keep dispatching.
                logger.exception("Event handler failed for %s", type(event).__name__)
