"""Events published by the session for fan-out to other users or channels.

Nothing in the core turns these into notifications; a listener is the
attachment point for e-mail or multi-user delivery.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol, Union

from .models import UserRole


@dataclass(frozen=True)
class RemarkAdded:
    record_id: str
    record_name: str
    remark: str
    author_id: str
    author_role: UserRole
    occurred_at: datetime


@dataclass(frozen=True)
class RevenueRecorded:
    revenue_id: str
    source: str
    amount: Decimal
    recorded_by: str
    occurred_at: datetime


SessionEvent = Union[RemarkAdded, RevenueRecorded]


class EventListener(Protocol):
    def publish(self, event: SessionEvent) -> None:
        ...


class NullListener:
    def publish(self, event: SessionEvent) -> None:
        return None


class RecordingListener:
    """Keeps every published event in memory."""

    def __init__(self) -> None:
        self.events: list[SessionEvent] = []

    def publish(self, event: SessionEvent) -> None:
        self.events.append(event)
