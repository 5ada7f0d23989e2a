"""Session state and the actions a signed-in user performs on it."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Mapping

from compliance_tracker.application.dto import LoginResult, RevenueEntryRequest
from compliance_tracker.config import SETTINGS, Settings, default_preferences
from compliance_tracker.domain.audit import (
    append_revenue,
    apply_compliance_update,
    new_entry_id,
    prepend_entry,
)
from compliance_tracker.domain.errors import NoActiveUserError, PermissionDeniedError
from compliance_tracker.domain.events import EventListener, NullListener, RemarkAdded, RevenueRecorded
from compliance_tracker.domain.models import (
    AuditLogEntry,
    ComplianceRecord,
    ComplianceStatus,
    Notification,
    RevenueRecord,
    User,
    UserPreferences,
    UserRole,
)
from compliance_tracker.domain.notifications import generate_reminders, mark_notification_read
from compliance_tracker.domain.policies import can_record_revenue, check_update_permitted
from compliance_tracker.domain.results import ComplianceUpdateResult, RevenueAppendResult, UpdateOutcome

logger = logging.getLogger(__name__)

# Fields whose change can move a record in or out of the reminder list.
REMINDER_FIELDS = frozenset({"status", "due_date"})


@dataclass
class AppState:
    compliances: tuple[ComplianceRecord, ...] = ()
    revenues: tuple[RevenueRecord, ...] = ()
    audit_log: tuple[AuditLogEntry, ...] = ()
    notifications: tuple[Notification, ...] = ()
    current_user: User | None = None


class ComplianceSession:
    """Routes every mutation of an ``AppState`` through the domain functions."""

    def __init__(
        self,
        state: AppState,
        clock: Callable[[], datetime] | None = None,
        listener: EventListener | None = None,
        settings: Settings = SETTINGS,
        id_factory: Callable[[], str] = new_entry_id,
    ) -> None:
        self.state = state
        self._settings = settings
        self._clock = clock or (lambda: datetime.now(settings.timezone))
        self._listener = listener or NullListener()
        self._id_factory = id_factory

    @property
    def user(self) -> User:
        if self.state.current_user is None:
            raise NoActiveUserError("No user is signed in")
        return self.state.current_user

    def login(self, role: UserRole, name: str | None = None) -> LoginResult:
        role = UserRole(role)
        handle = re.sub(r"[^a-z0-9]", "", role.value.lower())
        user = User(
            id=uuid.uuid4().hex[:9],
            name=name or f"Demo {role.value.split(' ')[0]}",
            role=role,
            email=f"{handle}@{self._settings.email_domain}",
            preferences=default_preferences(),
        )
        self.state.current_user = user
        logger.info("User %s signed in as %s", user.name, role.value)
        notifications = self.refresh_reminders()
        show_alert = bool(self.pending_tasks(ComplianceStatus.NOT_COMPLETED)) and (
            user.preferences.notifications.types.missed_deadlines
        )
        return LoginResult(user=user, notifications=notifications, show_pending_alert=show_alert)

    def logout(self) -> None:
        if self.state.current_user is not None:
            logger.info("User %s signed out", self.state.current_user.name)
        self.state.current_user = None
        self.state.notifications = ()

    def update_preferences(self, preferences: UserPreferences) -> tuple[Notification, ...]:
        self.state.current_user = replace(self.user, preferences=preferences)
        return self.refresh_reminders()

    def refresh_reminders(self) -> tuple[Notification, ...]:
        now = self._clock()
        self.state.notifications = generate_reminders(
            self.state.compliances,
            self.user.preferences,
            today=now.date(),
            now=now,
            window_days=self._settings.reminder_window_days,
        )
        logger.debug("Generated %d reminders", len(self.state.notifications))
        return self.state.notifications

    def mark_read(self, notification_id: str) -> tuple[Notification, ...]:
        self.state.notifications = mark_notification_read(self.state.notifications, notification_id)
        return self.state.notifications

    def pending_tasks(self, status: ComplianceStatus | None = None) -> list[ComplianceRecord]:
        if status is not None:
            return [r for r in self.state.compliances if r.status == status]
        return [r for r in self.state.compliances if r.status != ComplianceStatus.COMPLETED]

    def update_compliance(self, target_id: str, updates: Mapping[str, Any]) -> ComplianceUpdateResult:
        user = self.user
        check_update_permitted(user.role, updates.keys())
        now = self._clock()
        result = apply_compliance_update(
            self.state.compliances, target_id, updates, user, now, id_factory=self._id_factory
        )
        if result.outcome == UpdateOutcome.NOT_FOUND:
            logger.warning("Compliance record %s not found; update ignored", target_id)
            return result

        self.state.compliances = tuple(result.records)
        self.state.audit_log = prepend_entry(self.state.audit_log, result.audit_entry)
        if result.audit_entry is None:
            logger.info("Update to %s changed no fields", target_id)
            return result

        logger.info(
            "%s updated %s: %s",
            user.name,
            result.audit_entry.target_name,
            ", ".join(change.field for change in result.audit_entry.changes),
        )
        changed = {change.field for change in result.audit_entry.changes}
        if "leadership_remarks" in changed and result.record and result.record.leadership_remarks:
            if user.preferences.notifications.types.new_remarks:
                self._listener.publish(
                    RemarkAdded(
                        record_id=result.record.id,
                        record_name=result.record.name,
                        remark=result.record.leadership_remarks,
                        author_id=user.id,
                        author_role=user.role,
                        occurred_at=now,
                    )
                )
        if changed & REMINDER_FIELDS:
            self.refresh_reminders()
        return result

    def add_revenue(self, request: RevenueEntryRequest) -> RevenueAppendResult:
        user = self.user
        if not can_record_revenue(user.role):
            raise PermissionDeniedError(f"{user.role.value} cannot record revenue")
        now = self._clock()
        record = request.to_record(uuid.uuid4().hex[:9], now.date())
        result = append_revenue(self.state.revenues, record, user, now, id_factory=self._id_factory)
        self.state.revenues = tuple(result.records)
        self.state.audit_log = prepend_entry(self.state.audit_log, result.audit_entry)
        logger.info("%s recorded %s from %s", user.name, record.amount, record.source)
        if user.preferences.notifications.types.revenue_alerts:
            self._listener.publish(
                RevenueRecorded(
                    revenue_id=record.id,
                    source=record.source,
                    amount=record.amount,
                    recorded_by=user.id,
                    occurred_at=now,
                )
            )
        return result
