"""Executive risk summary for pending compliances via an optional AI service."""
from __future__ import annotations

import json
import logging
from typing import Sequence

from compliance_tracker.domain.errors import InsightServiceError
from compliance_tracker.domain.models import ComplianceRecord
from compliance_tracker.domain.repositories import InsightProvider
from compliance_tracker.domain.services import pending_records

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "AI insights are unavailable: no API key configured."
FAILURE_MESSAGE = "Unable to generate AI insights at this time. Please check your connection."


def build_insight_prompt(records: Sequence[ComplianceRecord]) -> str:
    data = [
        {
            "name": r.name,
            "due": str(r.due_date),
            "status": r.status.value,
            "reason": r.delay_reason or "Not provided",
        }
        for r in pending_records(records)
    ]
    return (
        "As a financial compliance risk analyst, review the following pending tax compliances "
        "and provide a high-level executive summary (3-4 bullet points) on potential risks, "
        "penalties, and prioritized action items.\n\n"
        f"Data: {json.dumps(data, ensure_ascii=False)}\n\n"
        'Format: JSON with a key "summary" as an array of strings.'
    )


class ComplianceInsightsUseCase:
    """Never raises: a missing or failing provider yields explanatory messages."""

    def __init__(self, provider: InsightProvider | None) -> None:
        self._provider = provider

    def execute(self, records: Sequence[ComplianceRecord]) -> list[str]:
        if self._provider is None or not self._provider.is_available:
            logger.warning("Compliance insights requested without a configured provider")
            return [UNAVAILABLE_MESSAGE]
        try:
            return self._provider.generate(build_insight_prompt(records))
        except InsightServiceError as exc:
            logger.warning("Compliance insight generation failed: %s", exc)
            return [FAILURE_MESSAGE]
