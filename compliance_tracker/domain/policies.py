"""Role rules for who may change which compliance fields."""
from __future__ import annotations

from typing import Iterable

from .errors import PermissionDeniedError
from .models import UserRole

LEADERSHIP_ROLES = frozenset({UserRole.CEO_CFO, UserRole.MANAGER})

LEADERSHIP_FIELDS = frozenset({"leadership_remarks"})
AUDITOR_FIELDS = frozenset(
    {
        "status",
        "actual_completion_date",
        "expected_completion_date",
        "delay_reason",
        "auditor_remarks",
        "other_observations",
    }
)
# Checklist definition fields; not editable from a session.
CHECKLIST_FIELDS = frozenset({"name", "due_date", "frequency", "criticality"})


def check_update_permitted(role: UserRole, fields: Iterable[str]) -> None:
    for name in fields:
        if name in CHECKLIST_FIELDS:
            raise PermissionDeniedError(f"{name} is fixed by the compliance checklist")
        if name in LEADERSHIP_FIELDS and role not in LEADERSHIP_ROLES:
            raise PermissionDeniedError(f"{role.value} cannot set {name}")
        if name in AUDITOR_FIELDS and role != UserRole.AUDITOR:
            raise PermissionDeniedError(f"{role.value} cannot set {name}")


def can_record_revenue(role: UserRole) -> bool:
    return role == UserRole.AUDITOR
