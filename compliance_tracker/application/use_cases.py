"""Application services orchestrating session start-up."""
from __future__ import annotations

from dataclasses import dataclass

from compliance_tracker.application.session import AppState
from compliance_tracker.domain.repositories import ComplianceRepository, RevenueRepository


@dataclass(slots=True)
class SessionSeedContext:
    compliance_repository: ComplianceRepository
    revenue_repository: RevenueRepository


class LoadSessionStateUseCase:
    def __init__(self, context: SessionSeedContext) -> None:
        self._context = context

    def execute(self) -> AppState:
        compliances = self._context.compliance_repository.list_compliances()
        revenues = self._context.revenue_repository.list_revenues()
        return AppState(compliances=tuple(compliances), revenues=tuple(revenues))
