from datetime import date, datetime, timezone
from decimal import Decimal

from compliance_tracker.domain.due_dates import parse_due_date
from compliance_tracker.domain.models import (
    ComplianceRecord,
    ComplianceStatus,
    Criticality,
    Frequency,
    RevenueRecord,
)
from compliance_tracker.domain.services import (
    completion_rate,
    filter_compliances,
    filter_revenues,
    revenue_categories,
    revenue_timeline,
    summarize,
)
from compliance_tracker.infrastructure.seed.mock_data import MOCK_REVENUE

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


def make_record(record_id: str, status: ComplianceStatus, frequency: Frequency = Frequency.MONTHLY, name: str = "") -> ComplianceRecord:
    return ComplianceRecord(
        id=record_id,
        name=name or f"Task {record_id}",
        due_date=parse_due_date("15"),
        frequency=frequency,
        status=status,
        criticality=Criticality.LOW,
        last_updated=NOW,
    )


def test_summary_counts_statuses_and_revenue():
    records = [
        make_record("1", ComplianceStatus.COMPLETED),
        make_record("2", ComplianceStatus.COMPLETED),
        make_record("3", ComplianceStatus.WIP),
    ]

    summary = summarize(records, MOCK_REVENUE)

    assert (summary.completed, summary.work_in_progress, summary.not_completed) == (2, 1, 0)
    assert summary.total == 3
    assert summary.total_revenue == Decimal("2480000")
    assert summary.completion_rate == 67
    assert [r.id for r in summary.pending] == ["3"]
    assert summary.status_breakdown()[ComplianceStatus.COMPLETED] == 2


def test_pending_preview_is_capped_at_five():
    records = [make_record(str(i), ComplianceStatus.NOT_COMPLETED) for i in range(8)]

    assert len(summarize(records, []).pending) == 5


def test_completion_rate_of_empty_set_is_zero():
    assert completion_rate([]) == 0
    assert summarize([], []).total_revenue == Decimal("0")


def test_completion_rate_rounds_halves_up():
    records = [make_record("0", ComplianceStatus.COMPLETED)]
    records += [make_record(str(i), ComplianceStatus.WIP) for i in range(1, 8)]

    assert completion_rate(records) == 13


def test_filter_compliances_by_frequency_and_search():
    records = [
        make_record("1", ComplianceStatus.WIP, Frequency.MONTHLY, "GSTR-1 Filing"),
        make_record("2", ComplianceStatus.WIP, Frequency.QUARTERLY, "Quarter 1 TDS Filing"),
        make_record("3", ComplianceStatus.WIP, Frequency.ANNUAL, "GST 9 & 9C Filing"),
    ]

    assert [r.id for r in filter_compliances(records)] == ["1", "2", "3"]
    assert [r.id for r in filter_compliances(records, "Quarterly")] == ["2"]
    assert [r.id for r in filter_compliances(records, search="gst")] == ["1", "3"]


def test_revenue_categories_and_filters():
    assert revenue_categories(MOCK_REVENUE) == ["All", "Consulting", "Product License", "Retail", "SaaS", "Services"]
    assert [r.source for r in filter_revenues(MOCK_REVENUE, "SaaS")] == ["Stark Ind."]
    assert len(filter_revenues(MOCK_REVENUE)) == len(MOCK_REVENUE)


def test_revenue_timeline_sorts_by_date():
    late = RevenueRecord("b", date(2024, 5, 1), "B", "ACH", Decimal("1"), "X")
    early = RevenueRecord("a", date(2024, 1, 1), "A", "ACH", Decimal("1"), "X")

    assert [r.id for r in revenue_timeline([late, early])] == ["a", "b"]
