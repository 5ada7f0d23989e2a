"""Reminder derivation for pending compliance records."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Iterable, Sequence

from .due_dates import DEFAULT_REMINDER_WINDOW_DAYS, days_until_due
from .models import (
    ComplianceRecord,
    ComplianceStatus,
    Notification,
    NotificationType,
    UserPreferences,
)

OVERDUE_PREFIX = "overdue-"
REMINDER_PREFIX = "reminder-"


def generate_reminders(
    records: Iterable[ComplianceRecord],
    preferences: UserPreferences,
    today: date,
    now: datetime | None = None,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> tuple[Notification, ...]:
    """Build the full reminder list for ``today``.

    The result replaces any previous list; identities depend only on the
    record id so regenerating over unchanged records yields the same ids.
    """
    settings = preferences.notifications
    if not settings.channels.in_app:
        return ()

    timestamp = now or datetime.now(timezone.utc)
    notifications: list[Notification] = []
    for record in records:
        if record.status == ComplianceStatus.COMPLETED:
            continue
        remaining = days_until_due(record.due_date, today)
        if remaining < 0:
            if settings.types.missed_deadlines:
                notifications.append(
                    Notification(
                        id=f"{OVERDUE_PREFIX}{record.id}",
                        title="Critical Overdue Task",
                        message=f"{record.name} is {abs(remaining)} days past due.",
                        type=NotificationType.URGENT,
                        timestamp=timestamp,
                        target_id=record.id,
                    )
                )
        elif remaining <= window_days:
            if settings.types.upcoming_deadlines:
                notifications.append(
                    Notification(
                        id=f"{REMINDER_PREFIX}{record.id}",
                        title="Upcoming Deadline",
                        message=f"{record.name} is due in {remaining} days.",
                        type=NotificationType.REMINDER,
                        timestamp=timestamp,
                        target_id=record.id,
                    )
                )
    return tuple(notifications)


def mark_notification_read(notifications: Sequence[Notification], notification_id: str) -> tuple[Notification, ...]:
    return tuple(
        replace(item, read=True) if item.id == notification_id else item
        for item in notifications
    )


def unread_count(notifications: Sequence[Notification]) -> int:
    return sum(1 for item in notifications if not item.read)
