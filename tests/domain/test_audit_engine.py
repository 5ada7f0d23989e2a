from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from compliance_tracker.domain.audit import (
    ADDED_REVENUE,
    UPDATED_COMPLIANCE,
    append_revenue,
    apply_compliance_update,
    prepend_entry,
    search_audit_log,
)
from compliance_tracker.domain.due_dates import parse_due_date
from compliance_tracker.domain.models import (
    ComplianceRecord,
    ComplianceStatus,
    Criticality,
    FieldChange,
    Frequency,
    RevenueRecord,
    User,
    UserRole,
)
from compliance_tracker.domain.results import UpdateOutcome

SEEDED_AT = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)
NOW = datetime(2024, 6, 20, 12, 0, tzinfo=timezone.utc)
AUDITOR = User(id="u-1", name="Demo Auditor", role=UserRole.AUDITOR, email="auditor@freshlabs.com")


def make_record(record_id: str = "comp-1", due: str = "15", **overrides) -> ComplianceRecord:
    fields = dict(
        id=record_id,
        name=f"Filing {record_id}",
        due_date=parse_due_date(due),
        frequency=Frequency.MONTHLY,
        status=ComplianceStatus.NOT_COMPLETED,
        criticality=Criticality.MEDIUM,
        last_updated=SEEDED_AT,
    )
    fields.update(overrides)
    return ComplianceRecord(**fields)


def counter():
    state = {"n": 0}

    def next_id() -> str:
        state["n"] += 1
        return f"log-{state['n']}"

    return next_id


def test_unknown_target_is_reported_and_changes_nothing():
    records = (make_record(),)

    result = apply_compliance_update(records, "missing", {"status": "Completed"}, AUDITOR, NOW)

    assert result.outcome == UpdateOutcome.NOT_FOUND
    assert not result.found
    assert result.records == records
    assert result.audit_entry is None


def test_status_change_produces_audit_entry():
    records = (make_record(), make_record("comp-2"))

    result = apply_compliance_update(records, "comp-1", {"status": "Completed"}, AUDITOR, NOW, id_factory=lambda: "log-1")

    assert result.outcome == UpdateOutcome.APPLIED
    entry = result.audit_entry
    assert entry.id == "log-1"
    assert entry.action == UPDATED_COMPLIANCE
    assert entry.timestamp == NOW
    assert (entry.user_id, entry.user_name, entry.user_role) == ("u-1", "Demo Auditor", UserRole.AUDITOR)
    assert (entry.target_id, entry.target_name) == ("comp-1", "Filing comp-1")
    assert entry.changes == (FieldChange("status", "Not Completed", "Completed"),)
    assert result.records[0].status == ComplianceStatus.COMPLETED
    assert result.records[0].last_updated == NOW
    assert result.records[1] == records[1]


def test_identical_update_has_no_entry_but_touches_last_updated():
    records = (make_record(delay_reason="Pending bank verification"),)

    result = apply_compliance_update(
        records,
        "comp-1",
        {"status": ComplianceStatus.NOT_COMPLETED, "delay_reason": "Pending bank verification"},
        AUDITOR,
        NOW,
    )

    assert result.outcome == UpdateOutcome.UNCHANGED
    assert result.audit_entry is None
    assert result.records[0].last_updated == NOW


def test_completion_date_derives_delay_days():
    records = (make_record(due="15"),)

    result = apply_compliance_update(
        records,
        "comp-1",
        {"status": "Completed", "actual_completion_date": "2024-06-20"},
        AUDITOR,
        NOW,
    )

    updated = result.records[0]
    assert updated.actual_completion_date == date(2024, 6, 20)
    assert updated.delay_days == 5
    assert [c.field for c in result.audit_entry.changes] == ["status", "actual_completion_date", "delay_days"]
    assert result.audit_entry.changes[1] == FieldChange("actual_completion_date", None, "2024-06-20")
    assert result.audit_entry.changes[2] == FieldChange("delay_days", None, 5)


def test_early_completion_records_zero_delay():
    records = (make_record(due="15"),)

    result = apply_compliance_update(records, "comp-1", {"actual_completion_date": "2024-06-10"}, AUDITOR, NOW)

    assert result.records[0].delay_days == 0


def test_delay_days_use_due_date_before_the_update():
    records = (make_record(due="15"),)

    result = apply_compliance_update(
        records, "comp-1", {"due_date": "25", "actual_completion_date": "2024-06-20"}, AUDITOR, NOW
    )

    assert result.records[0].due_date == parse_due_date("25")
    assert result.records[0].delay_days == 5


def test_clearing_completion_date_clears_delay_days():
    records = (make_record(actual_completion_date=date(2024, 6, 20), delay_days=5),)

    result = apply_compliance_update(records, "comp-1", {"actual_completion_date": None}, AUDITOR, NOW)

    assert result.records[0].actual_completion_date is None
    assert result.records[0].delay_days is None
    assert FieldChange("delay_days", 5, None) in result.audit_entry.changes


def test_delay_days_cannot_be_set_directly():
    with pytest.raises(ValueError):
        apply_compliance_update((make_record(),), "comp-1", {"delay_days": 3}, AUDITOR, NOW)


def test_unknown_field_and_status_are_rejected():
    with pytest.raises(ValueError):
        apply_compliance_update((make_record(),), "comp-1", {"owner": "x"}, AUDITOR, NOW)
    with pytest.raises(ValueError):
        apply_compliance_update((make_record(),), "comp-1", {"status": "Done"}, AUDITOR, NOW)


def test_audit_log_is_newest_first():
    records = (make_record(),)
    log = ()
    next_id = counter()
    for step, status in enumerate(["Work In Progress", "Completed", "Not Completed"]):
        result = apply_compliance_update(
            records, "comp-1", {"status": status}, AUDITOR, NOW + timedelta(minutes=step), id_factory=next_id
        )
        records = result.records
        log = prepend_entry(log, result.audit_entry)

    assert [entry.id for entry in log] == ["log-3", "log-2", "log-1"]
    assert log[0].changes[0].new_value == "Not Completed"
    assert log[-1].changes[0].new_value == "Work In Progress"


def test_prepend_entry_ignores_missing_entry():
    assert prepend_entry((), None) == ()


def test_append_revenue_always_logs_amount():
    existing = (RevenueRecord("1", date(2024, 1, 5), "Global Tech Solutions", "Wire Transfer", Decimal("450000"), "Services"),)
    new_record = RevenueRecord("r-9", date(2024, 6, 20), "Acme Ltd", "ACH", Decimal("1500"), "Consulting")

    result = append_revenue(existing, new_record, AUDITOR, NOW, id_factory=lambda: "log-9")

    assert result.records == (*existing, new_record)
    entry = result.audit_entry
    assert entry.action == ADDED_REVENUE
    assert (entry.target_id, entry.target_name) == ("r-9", "Acme Ltd")
    assert entry.changes == (FieldChange("amount", None, 1500.0),)


def test_search_audit_log_matches_user_target_or_action():
    records = (make_record(),)
    result = apply_compliance_update(records, "comp-1", {"status": "Completed"}, AUDITOR, NOW)
    log = prepend_entry((), result.audit_entry)

    assert search_audit_log(log, "auditor") == log
    assert search_audit_log(log, "FILING") == log
    assert search_audit_log(log, "updated") == log
    assert search_audit_log(log, "revenue") == ()
    assert search_audit_log(log, "") == log
