"""Domain services for dashboard summaries and list filtering."""
from __future__ import annotations

import math
from decimal import Decimal
from typing import Sequence

from .models import ComplianceRecord, ComplianceStatus, RevenueRecord
from .results import DashboardSummary

ALL = "All"
PENDING_PREVIEW_SIZE = 5


def completion_rate(records: Sequence[ComplianceRecord]) -> int:
    if not records:
        return 0
    completed = sum(1 for r in records if r.status == ComplianceStatus.COMPLETED)
    # halves round up
    return math.floor(completed * 100 / len(records) + 0.5)


def total_revenue(records: Sequence[RevenueRecord]) -> Decimal:
    return sum((r.amount for r in records), Decimal("0"))


def pending_records(records: Sequence[ComplianceRecord]) -> list[ComplianceRecord]:
    return [r for r in records if r.status != ComplianceStatus.COMPLETED]


def summarize(compliances: Sequence[ComplianceRecord], revenues: Sequence[RevenueRecord]) -> DashboardSummary:
    counts = {status: 0 for status in ComplianceStatus}
    for record in compliances:
        counts[record.status] += 1
    return DashboardSummary(
        completed=counts[ComplianceStatus.COMPLETED],
        work_in_progress=counts[ComplianceStatus.WIP],
        not_completed=counts[ComplianceStatus.NOT_COMPLETED],
        total_revenue=total_revenue(revenues),
        completion_rate=completion_rate(compliances),
        pending=tuple(pending_records(compliances)[:PENDING_PREVIEW_SIZE]),
    )


def filter_compliances(
    records: Sequence[ComplianceRecord],
    frequency: str = ALL,
    search: str = "",
) -> list[ComplianceRecord]:
    needle = (search or "").strip().lower()
    return [
        r
        for r in records
        if (frequency == ALL or r.frequency.value == frequency)
        and needle in r.name.lower()
    ]


def revenue_categories(records: Sequence[RevenueRecord]) -> list[str]:
    return sorted({ALL, *(r.category for r in records)})


def filter_revenues(records: Sequence[RevenueRecord], category: str = ALL) -> list[RevenueRecord]:
    if category == ALL:
        return list(records)
    return [r for r in records if r.category == category]


def revenue_timeline(records: Sequence[RevenueRecord]) -> list[RevenueRecord]:
    return sorted(records, key=lambda r: r.date)
