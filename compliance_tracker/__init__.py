"""Role-based compliance and revenue tracking toolkit."""
from compliance_tracker.application.session import AppState, ComplianceSession
from compliance_tracker.application.use_cases import LoadSessionStateUseCase, SessionSeedContext
from compliance_tracker.domain.audit import append_revenue, apply_compliance_update
from compliance_tracker.domain.due_dates import compute_delay_days, compute_urgency, resolve_due_date
from compliance_tracker.domain.notifications import generate_reminders, mark_notification_read

__all__ = [
    "AppState",
    "ComplianceSession",
    "LoadSessionStateUseCase",
    "SessionSeedContext",
    "append_revenue",
    "apply_compliance_update",
    "compute_delay_days",
    "compute_urgency",
    "resolve_due_date",
    "generate_reminders",
    "mark_notification_read",
]
