"""Repository and service interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import ComplianceRecord, RevenueRecord


class ComplianceRepository(Protocol):
    """Provides the compliance records a session starts from."""

    def list_compliances(self) -> Sequence[ComplianceRecord]:
        ...


class RevenueRepository(Protocol):
    """Provides the revenue records a session starts from."""

    def list_revenues(self) -> Sequence[RevenueRecord]:
        ...


class InsightProvider(Protocol):
    """External service that turns a prompt into executive bullet points."""

    @property
    def is_available(self) -> bool:
        ...

    def generate(self, prompt: str) -> list[str]:
        ...
