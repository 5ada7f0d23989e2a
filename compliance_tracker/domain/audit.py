"""State transitions for compliance and revenue records with audit logging."""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Sequence

from .due_dates import compute_delay_days, parse_due_date, parse_iso_date
from .models import (
    AuditLogEntry,
    CalendarDate,
    ComplianceRecord,
    ComplianceStatus,
    Criticality,
    DayOfMonth,
    DiffValue,
    FieldChange,
    Frequency,
    RevenueRecord,
    User,
)
from .results import ComplianceUpdateResult, RevenueAppendResult, UpdateOutcome

UPDATED_COMPLIANCE = "Updated Compliance"
ADDED_REVENUE = "Added Revenue Entry"

PROTECTED_FIELDS = frozenset({"id", "last_updated", "delay_days"})


def new_entry_id() -> str:
    return uuid.uuid4().hex[:12]


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def _optional_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    return parse_iso_date(value)


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "name": str,
    "due_date": parse_due_date,
    "frequency": Frequency,
    "status": ComplianceStatus,
    "criticality": Criticality,
    "actual_completion_date": _optional_date,
    "expected_completion_date": _optional_date,
    "delay_reason": _optional_text,
    "auditor_remarks": _optional_text,
    "leadership_remarks": _optional_text,
    "other_observations": _optional_text,
}

EDITABLE_FIELDS = frozenset(_COERCERS)


def normalize_updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    """Validate field names and coerce raw form values to record types."""
    normalized: dict[str, Any] = {}
    for name, value in updates.items():
        if name in PROTECTED_FIELDS:
            raise ValueError(f"Field {name!r} cannot be set directly")
        coercer = _COERCERS.get(name)
        if coercer is None:
            raise ValueError(f"Unknown compliance field: {name!r}")
        normalized[name] = coercer(value)
    return normalized


def to_diff_value(value: Any) -> DiffValue:
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (DayOfMonth, CalendarDate)):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    return str(value)


def diff_fields(before: ComplianceRecord, updates: Mapping[str, Any]) -> list[FieldChange]:
    changes: list[FieldChange] = []
    for name, new_value in updates.items():
        old_value = getattr(before, name)
        if old_value != new_value:
            changes.append(
                FieldChange(
                    field=name,
                    old_value=to_diff_value(old_value),
                    new_value=to_diff_value(new_value),
                )
            )
    return changes


def prepend_entry(log: Sequence[AuditLogEntry], entry: AuditLogEntry | None) -> tuple[AuditLogEntry, ...]:
    if entry is None:
        return tuple(log)
    return (entry, *log)


def apply_compliance_update(
    records: Sequence[ComplianceRecord],
    target_id: str,
    updates: Mapping[str, Any],
    acting_user: User,
    now: datetime,
    id_factory: Callable[[], str] = new_entry_id,
) -> ComplianceUpdateResult:
    """Apply ``updates`` to one record and describe the change.

    ``last_updated`` advances even when no field value actually changed; the
    outcome is then ``UNCHANGED`` and no audit entry is produced.
    """
    target = next((record for record in records if record.id == target_id), None)
    if target is None:
        return ComplianceUpdateResult(outcome=UpdateOutcome.NOT_FOUND, records=tuple(records))

    final_updates = normalize_updates(updates)
    if "actual_completion_date" in final_updates:
        completion = final_updates["actual_completion_date"]
        # measured against the due date in force before this update
        final_updates["delay_days"] = (
            compute_delay_days(target.due_date, completion) if completion is not None else None
        )

    changes = diff_fields(target, final_updates)
    entry = None
    if changes:
        entry = AuditLogEntry(
            id=id_factory(),
            timestamp=now,
            user_id=acting_user.id,
            user_name=acting_user.name,
            user_role=acting_user.role,
            action=UPDATED_COMPLIANCE,
            target_id=target.id,
            target_name=target.name,
            changes=tuple(changes),
        )

    updated = replace(target, **final_updates, last_updated=now)
    new_records = tuple(updated if record.id == target_id else record for record in records)
    return ComplianceUpdateResult(
        outcome=UpdateOutcome.APPLIED if changes else UpdateOutcome.UNCHANGED,
        records=new_records,
        audit_entry=entry,
        record=updated,
    )


def append_revenue(
    records: Sequence[RevenueRecord],
    new_record: RevenueRecord,
    acting_user: User,
    now: datetime,
    id_factory: Callable[[], str] = new_entry_id,
) -> RevenueAppendResult:
    entry = AuditLogEntry(
        id=id_factory(),
        timestamp=now,
        user_id=acting_user.id,
        user_name=acting_user.name,
        user_role=acting_user.role,
        action=ADDED_REVENUE,
        target_id=new_record.id,
        target_name=new_record.source,
        changes=(FieldChange(field="amount", old_value=None, new_value=to_diff_value(new_record.amount)),),
    )
    return RevenueAppendResult(records=(*records, new_record), audit_entry=entry)


def search_audit_log(log: Sequence[AuditLogEntry], term: str) -> tuple[AuditLogEntry, ...]:
    needle = (term or "").strip().lower()
    if not needle:
        return tuple(log)
    return tuple(
        entry
        for entry in log
        if needle in entry.user_name.lower()
        or needle in entry.target_name.lower()
        or needle in entry.action.lower()
    )
