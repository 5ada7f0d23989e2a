"""Report generators for compliance, revenue and audit-trail exports."""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping, Sequence

import pandas as pd

from compliance_tracker.config import SETTINGS
from compliance_tracker.domain.models import (
    AuditLogEntry,
    ComplianceRecord,
    ReportFormat,
    RevenueRecord,
)
from compliance_tracker.domain.services import completion_rate, total_revenue


@dataclass(frozen=True)
class ExportedReport:
    file_name: str
    mime: str
    content: bytes


@dataclass(frozen=True)
class FinalizedReport:
    id: str
    title: str
    period: str
    auditor: str
    date: str


FINALIZED_REPORTS: tuple[FinalizedReport, ...] = (
    FinalizedReport("rep-001", "Monthly Compliance Review", "January 2024", "Jane Smith", "2024-02-01"),
    FinalizedReport("rep-002", "Quarterly Tax Audit", "Q4 2023", "Robert Brown", "2024-01-15"),
    FinalizedReport("rep-003", "Annual Revenue Consolidation", "FY 2023-24", "Jane Smith", "2024-03-10"),
)

FINALIZED_HEADERS = [
    "Audit ID",
    "Organization Name",
    "Audit Period",
    "Auditor Name",
    "Compliance Status",
    "Risk Level",
    "Key Findings",
    "Recommendations",
    "Approval Status",
    "Report Date",
]


def format_amount(amount: Decimal, symbol: str | None = None) -> str:
    symbol = SETTINGS.currency_symbol if symbol is None else symbol
    return f"{symbol}{amount:,}"


def _file_stem(title: str) -> str:
    return "_".join(title.split())


def compliances_to_rows(records: Sequence[ComplianceRecord]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in records:
        rows.append(
            {
                "id": item.id,
                "name": item.name,
                "frequency": item.frequency.value,
                "criticality": item.criticality.value,
                "due_date": str(item.due_date),
                "status": item.status.value,
                "actual_completion_date": item.actual_completion_date.isoformat() if item.actual_completion_date else "",
                "delay_days": "" if item.delay_days is None else str(item.delay_days),
                "delay_reason": item.delay_reason or "",
                "leadership_remarks": item.leadership_remarks or "",
                "last_updated": item.last_updated.isoformat(),
            }
        )
    return rows


def revenues_to_rows(records: Sequence[RevenueRecord]) -> list[dict[str, str]]:
    return [
        {
            "id": r.id,
            "date": r.date.isoformat(),
            "source": r.source,
            "mode": r.mode,
            "amount": str(r.amount),
            "category": r.category,
        }
        for r in records
    ]


def audit_log_to_rows(entries: Sequence[AuditLogEntry]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for entry in entries:
        rows.append(
            {
                "timestamp": entry.timestamp.isoformat(),
                "user": entry.user_name,
                "role": entry.user_role.value,
                "action": entry.action,
                "target": entry.target_name,
                "changes": "; ".join(
                    f"{c.field}: {'' if c.old_value is None else c.old_value} -> {'' if c.new_value is None else c.new_value}"
                    for c in entry.changes
                ),
            }
        )
    return rows


def render_csv(rows: Sequence[Mapping[str, object]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [], quoting=csv.QUOTE_MINIMAL)
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_xlsx(sheets: Mapping[str, Sequence[Mapping[str, object]]]) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(list(rows)).to_excel(writer, sheet_name=sheet_name[:31], index=False)
    buf.seek(0)
    return buf.getvalue()


def audit_period(moment: datetime) -> str:
    return f"Q{(moment.month - 1) // 3 + 1} - {moment.year}"


def render_summary_text(
    title: str,
    compliances: Sequence[ComplianceRecord],
    revenues: Sequence[RevenueRecord],
    generated_at: datetime,
    organization: str | None = None,
) -> str:
    organization = organization or SETTINGS.organization
    lines = [
        f"{organization.upper()} AUDIT REPORT",
        "-" * 33,
        f"Title: {title}",
        f"Audit Period: {audit_period(generated_at)}",
        "Status: Finalized & Approved",
        f"Date Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "SUMMARY FINDINGS:",
        f"- Compliance Completion Rate: {completion_rate(compliances)}%",
        f"- Revenue Tracked: {format_amount(total_revenue(revenues))}",
        "",
        "This document is an official regulatory compliance record.",
    ]
    return "\n".join(lines) + "\n"


def render_finalized_report_csv(report: FinalizedReport, organization: str | None = None) -> bytes:
    row = [
        report.id,
        organization or SETTINGS.organization,
        report.period,
        report.auditor,
        "Approved",
        "Low",
        "Statutory compliance maintained across all tested controls",
        "Continue periodic internal reviews",
        "Finalized",
        report.date,
    ]
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    buffer.write(",".join(FINALIZED_HEADERS) + "\n")
    writer.writerow(row)
    return buffer.getvalue().encode("utf-8")


def export_report(
    report_format: ReportFormat | str,
    title: str,
    compliances: Sequence[ComplianceRecord],
    revenues: Sequence[RevenueRecord],
    audit_log: Sequence[AuditLogEntry],
    generated_at: datetime,
) -> ExportedReport:
    """Render the consolidated report in the user's preferred format.

    PDF maps to the printable plain-text summary; no PDF bytes are produced.
    """
    report_format = ReportFormat(report_format)
    stem = _file_stem(title)
    if report_format == ReportFormat.CSV:
        return ExportedReport(
            file_name=f"{stem}_Data.csv",
            mime="text/csv",
            content=render_csv(compliances_to_rows(compliances)),
        )
    if report_format == ReportFormat.XLS:
        content = render_xlsx(
            {
                "Compliance": compliances_to_rows(compliances),
                "Revenue": revenues_to_rows(revenues),
                "Audit Trail": audit_log_to_rows(audit_log),
            }
        )
        return ExportedReport(
            file_name=f"{stem}_Report.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            content=content,
        )
    text = render_summary_text(title, compliances, revenues, generated_at)
    return ExportedReport(file_name=f"{stem}_Report.txt", mime="text/plain", content=text.encode("utf-8"))
