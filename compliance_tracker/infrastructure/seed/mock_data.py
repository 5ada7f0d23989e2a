"""Seed data for a demo session: the statutory checklist and sample revenue."""
from __future__ import annotations

import random
from datetime import date, datetime
from decimal import Decimal
from typing import Sequence

from compliance_tracker.domain.due_dates import compute_delay_days, parse_due_date
from compliance_tracker.domain.models import (
    ChecklistItem,
    ComplianceRecord,
    ComplianceStatus,
    Criticality,
    Frequency,
    RevenueRecord,
)

M, Q, A = Frequency.MONTHLY, Frequency.QUARTERLY, Frequency.ANNUAL
LOW, MEDIUM, HIGH = Criticality.LOW, Criticality.MEDIUM, Criticality.HIGH

_CHECKLIST = [
    ("TDS / TCS Challan Payment", M, HIGH, "7"),
    ("GSTR-1 Filing", M, HIGH, "11"),
    ("PF & ESI Payment", M, MEDIUM, "15"),
    ("GSTR-3B Filing", M, HIGH, "20"),
    ("Quarter 1 TDS Filing", Q, MEDIUM, "2024-07-31"),
    ("Quarter 2 TDS Filing", Q, MEDIUM, "2024-09-30"),
    ("Quarter 3 TDS Filing", Q, MEDIUM, "2025-01-31"),
    ("Quarter 4 TDS Filing", Q, MEDIUM, "2025-05-31"),
    ("Quarter 1 Advance Tax", Q, HIGH, "2024-06-15"),
    ("Quarter 2 Advance Tax", Q, HIGH, "2024-09-15"),
    ("Quarter 3 Advance Tax", Q, HIGH, "2024-12-15"),
    ("Quarter 4 Advance Tax", Q, HIGH, "2025-03-15"),
    ("Non-Audit Cases – IT Filing", A, MEDIUM, "2024-07-31"),
    ("Tax Audit Cases – IT Filing", A, HIGH, "2024-09-30"),
    ("GST 9 & 9C Filing", A, HIGH, "2024-12-31"),
]

COMPLIANCE_CHECKLIST: tuple[ChecklistItem, ...] = tuple(
    ChecklistItem(name=name, frequency=freq, criticality=crit, due_date=parse_due_date(due))
    for name, freq, crit, due in _CHECKLIST
)

MOCK_REVENUE: tuple[RevenueRecord, ...] = (
    RevenueRecord("1", date(2024, 1, 5), "Global Tech Solutions", "Wire Transfer", Decimal("450000"), "Services"),
    RevenueRecord("2", date(2024, 1, 12), "Initech Corp", "ACH", Decimal("280000"), "Product License"),
    RevenueRecord("3", date(2024, 2, 8), "Hooli Ltd", "Wire Transfer", Decimal("620000"), "Consulting"),
    RevenueRecord("4", date(2024, 3, 15), "Dunder Mifflin", "Check", Decimal("150000"), "Retail"),
    RevenueRecord("5", date(2024, 4, 20), "Stark Ind.", "Wire Transfer", Decimal("980000"), "SaaS"),
)

SEED_COMPLETION_DATE = date(2024, 1, 10)
SEED_DELAY_REASON = "Pending bank verification"


def _seed_status(rng: random.Random) -> ComplianceStatus:
    if rng.random() > 0.3:
        return ComplianceStatus.COMPLETED
    if rng.random() > 0.5:
        return ComplianceStatus.WIP
    return ComplianceStatus.NOT_COMPLETED


def build_seed_compliances(
    checklist: Sequence[ChecklistItem],
    now: datetime,
    rng: random.Random | None = None,
) -> list[ComplianceRecord]:
    """Turn checklist items into records with randomized demo progress.

    Pass a seeded ``random.Random`` for a reproducible record set.
    """
    rng = rng or random.Random()
    records: list[ComplianceRecord] = []
    for idx, item in enumerate(checklist):
        status = _seed_status(rng)
        completed_on = SEED_COMPLETION_DATE if rng.random() > 0.3 else None
        delay_reason = SEED_DELAY_REASON if rng.random() > 0.8 else None
        records.append(
            ComplianceRecord(
                id=f"comp-{idx}",
                name=item.name,
                due_date=item.due_date,
                frequency=item.frequency,
                status=status,
                criticality=item.criticality,
                last_updated=now,
                actual_completion_date=completed_on,
                delay_reason=delay_reason,
                delay_days=compute_delay_days(item.due_date, completed_on) if completed_on else None,
            )
        )
    return records
