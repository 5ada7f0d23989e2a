"""Application-level DTOs for dashboard actions."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Sequence

from compliance_tracker.domain.due_dates import parse_iso_date
from compliance_tracker.domain.errors import InvalidRevenueEntryError
from compliance_tracker.domain.models import Notification, RevenueRecord, User

DEFAULT_REVENUE_MODE = "Wire Transfer"
DEFAULT_REVENUE_CATEGORY = "Consulting"


def parse_amount(value: object) -> Decimal:
    """Read a currency amount typed into a form ("4,50,000", "₹ 1200.50")."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        raise InvalidRevenueEntryError("Amount is required")
    s = str(value).strip()
    for ch in [",", "₹", "$", "€", "£", " "]:
        s = s.replace(ch, "")
    if not s:
        raise InvalidRevenueEntryError("Amount is required")
    try:
        return Decimal(s)
    except InvalidOperation as exc:
        raise InvalidRevenueEntryError(f"Amount is not a number: {value!r}") from exc


@dataclass(slots=True, frozen=True)
class RevenueEntryRequest:
    source: str
    amount: object
    date: date | str | None = None
    mode: str | None = None
    category: str | None = None

    def to_record(self, record_id: str, today: date) -> RevenueRecord:
        source = (self.source or "").strip()
        if not source:
            raise InvalidRevenueEntryError("Source is required")
        amount = parse_amount(self.amount)
        if amount <= 0:
            raise InvalidRevenueEntryError("Amount must be greater than zero")
        return RevenueRecord(
            id=record_id,
            date=parse_iso_date(self.date) if self.date else today,
            source=source,
            mode=(self.mode or "").strip() or DEFAULT_REVENUE_MODE,
            amount=amount,
            category=(self.category or "").strip() or DEFAULT_REVENUE_CATEGORY,
        )


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    notifications: Sequence[Notification]
    show_pending_alert: bool
