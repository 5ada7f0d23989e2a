"""In-memory repositories seeding a dashboard session."""
from __future__ import annotations

import random
from datetime import datetime
from typing import Sequence

from compliance_tracker.domain.models import ChecklistItem, ComplianceRecord, RevenueRecord
from compliance_tracker.domain.repositories import ComplianceRepository, RevenueRepository
from compliance_tracker.infrastructure.seed.mock_data import MOCK_REVENUE, build_seed_compliances


class SeededComplianceRepository(ComplianceRepository):
    def __init__(
        self,
        checklist: Sequence[ChecklistItem],
        now: datetime,
        seed: int | None = None,
    ) -> None:
        self._records = tuple(build_seed_compliances(checklist, now, random.Random(seed)))

    def list_compliances(self) -> Sequence[ComplianceRecord]:
        return self._records


class StaticComplianceRepository(ComplianceRepository):
    def __init__(self, records: Sequence[ComplianceRecord]) -> None:
        self._records = tuple(records)

    def list_compliances(self) -> Sequence[ComplianceRecord]:
        return self._records


class StaticRevenueRepository(RevenueRepository):
    def __init__(self, records: Sequence[RevenueRecord] = MOCK_REVENUE) -> None:
        self._records = tuple(records)

    def list_revenues(self) -> Sequence[RevenueRecord]:
        return self._records
