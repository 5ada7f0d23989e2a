"""Command-line entrypoint for reminders, summaries and report export."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, time
from pathlib import Path

from compliance_tracker.application.session import AppState
from compliance_tracker.application.use_cases import LoadSessionStateUseCase, SessionSeedContext
from compliance_tracker.config import SETTINGS, default_preferences
from compliance_tracker.domain.models import ReportFormat
from compliance_tracker.domain.notifications import generate_reminders
from compliance_tracker.domain.services import summarize
from compliance_tracker.infrastructure.repositories.memory_repositories import (
    SeededComplianceRepository,
    StaticRevenueRepository,
)
from compliance_tracker.infrastructure.storage.checklist_store import load_checklist
from compliance_tracker.presentation.reports import export_report, format_amount


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compliance and revenue tracker")
    parser.add_argument("--today", type=str, help="Reference date (YYYY-MM-DD); defaults to today")
    parser.add_argument("--seed", type=int, help="Random seed for demo compliance progress")
    parser.add_argument("--checklist", type=str, help="Path to a checklist override JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("reminders", help="List overdue and upcoming compliance reminders")
    sub.add_parser("summary", help="Print the executive dashboard summary")

    export = sub.add_parser("export", help="Export the consolidated report")
    export.add_argument("--format", type=str, default=ReportFormat.PDF.value, choices=[f.value for f in ReportFormat])
    export.add_argument("--title", type=str, default="Monthly Compliance Review")
    export.add_argument("--output", type=str, help="Output file path; defaults to the report file name")
    return parser.parse_args(argv)


def load_state(args: argparse.Namespace, now: datetime) -> AppState:
    checklist_path = Path(args.checklist) if args.checklist else SETTINGS.checklist_path
    context = SessionSeedContext(
        compliance_repository=SeededComplianceRepository(load_checklist(checklist_path), now, seed=args.seed),
        revenue_repository=StaticRevenueRepository(),
    )
    return LoadSessionStateUseCase(context).execute()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    today = date.fromisoformat(args.today) if args.today else datetime.now(SETTINGS.timezone).date()
    now = datetime.combine(today, time(), tzinfo=SETTINGS.timezone)
    state = load_state(args, now)

    if args.command == "reminders":
        reminders = generate_reminders(
            state.compliances,
            default_preferences(),
            today=today,
            now=now,
            window_days=SETTINGS.reminder_window_days,
        )
        print(f"Reminders for {today.isoformat()}")
        print("==========================")
        if not reminders:
            print("No reminders.")
        for item in reminders:
            print(f"[{item.type.value}] {item.title}: {item.message}")
        return 0

    if args.command == "summary":
        summary = summarize(state.compliances, state.revenues)
        print("Executive Summary")
        print("=================")
        print(f"Completed: {summary.completed}")
        print(f"Work in progress: {summary.work_in_progress}")
        print(f"Not completed: {summary.not_completed}")
        print(f"Completion rate: {summary.completion_rate}%")
        print(f"Total revenue: {format_amount(summary.total_revenue)}")
        if summary.pending:
            print("\nPending:")
            for record in summary.pending:
                print(f"- {record.name} (due {record.due_date}, {record.status.value})")
        return 0

    report = export_report(
        args.format,
        args.title,
        state.compliances,
        state.revenues,
        state.audit_log,
        generated_at=now,
    )
    target = Path(args.output or report.file_name)
    target.write_bytes(report.content)
    print(f"Wrote {report.file_name} ({len(report.content)} bytes) to {target}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
