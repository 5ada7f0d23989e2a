"""Domain-level results for record mutations and dashboard summaries."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Sequence

from .models import AuditLogEntry, ComplianceRecord, ComplianceStatus, RevenueRecord


class UpdateOutcome(str, Enum):
    APPLIED = "applied"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ComplianceUpdateResult:
    outcome: UpdateOutcome
    records: Sequence[ComplianceRecord]
    audit_entry: AuditLogEntry | None = None
    record: ComplianceRecord | None = None

    @property
    def found(self) -> bool:
        return self.outcome != UpdateOutcome.NOT_FOUND


@dataclass(frozen=True)
class RevenueAppendResult:
    records: Sequence[RevenueRecord]
    audit_entry: AuditLogEntry


@dataclass(frozen=True)
class DashboardSummary:
    completed: int
    work_in_progress: int
    not_completed: int
    total_revenue: Decimal
    completion_rate: int
    pending: Sequence[ComplianceRecord] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return self.completed + self.work_in_progress + self.not_completed

    def status_breakdown(self) -> dict[ComplianceStatus, int]:
        return {
            ComplianceStatus.COMPLETED: self.completed,
            ComplianceStatus.WIP: self.work_in_progress,
            ComplianceStatus.NOT_COMPLETED: self.not_completed,
        }
