"""Streamlit front-end for the compliance and revenue tracker."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pandas as pd
import streamlit as st

from compliance_tracker import ComplianceSession, LoadSessionStateUseCase, SessionSeedContext
from compliance_tracker.application.dto import RevenueEntryRequest
from compliance_tracker.application.insights import ComplianceInsightsUseCase
from compliance_tracker.config import SETTINGS
from compliance_tracker.domain.audit import search_audit_log
from compliance_tracker.domain.errors import ComplianceTrackerError
from compliance_tracker.domain.events import RecordingListener
from compliance_tracker.domain.models import ComplianceStatus, Frequency, ReportFormat, UserRole
from compliance_tracker.domain.notifications import unread_count
from compliance_tracker.domain.services import (
    ALL,
    filter_compliances,
    filter_revenues,
    revenue_categories,
    revenue_timeline,
    summarize,
)
from compliance_tracker.infrastructure.insights.gemini_client import GeminiInsightProvider
from compliance_tracker.infrastructure.repositories.memory_repositories import (
    SeededComplianceRepository,
    StaticRevenueRepository,
)
from compliance_tracker.infrastructure.storage.checklist_store import load_checklist
from compliance_tracker.presentation.reports import (
    FINALIZED_REPORTS,
    audit_log_to_rows,
    compliances_to_rows,
    export_report,
    format_amount,
    render_finalized_report_csv,
    revenues_to_rows,
)

st.set_page_config(page_title="Compliance Tracker", layout="wide")

VIEWS = ["Dashboard", "Compliance Tracker", "Revenue Records", "Audit Reports", "Audit Trail", "User Preferences"]


def new_session() -> ComplianceSession:
    now = datetime.now(SETTINGS.timezone)
    context = SessionSeedContext(
        compliance_repository=SeededComplianceRepository(load_checklist(SETTINGS.checklist_path), now),
        revenue_repository=StaticRevenueRepository(),
    )
    return ComplianceSession(LoadSessionStateUseCase(context).execute(), listener=RecordingListener())


if "session" not in st.session_state:
    st.session_state["session"] = new_session()
if "view" not in st.session_state:
    st.session_state["view"] = VIEWS[0]

session: ComplianceSession = st.session_state["session"]
state = session.state


def show_login() -> None:
    st.title(SETTINGS.organization)
    role_value = st.radio("Sign in as", [r.value for r in UserRole])
    if st.button("Sign in"):
        result = session.login(UserRole(role_value))
        if result.notifications:
            st.toast(f"Automated reminders generated: {len(result.notifications)} items")
        st.session_state["pending_alert"] = result.show_pending_alert
        st.rerun()


def show_dashboard() -> None:
    user = session.user
    summary = summarize(state.compliances, state.revenues)
    widgets = user.preferences.visible_widgets
    st.header("Executive Summary")
    if st.session_state.pop("pending_alert", False):
        st.warning(f"{len(session.pending_tasks(ComplianceStatus.NOT_COMPLETED))} compliances are not completed.")
    if widgets.stats_summary:
        cols = st.columns(4)
        cols[0].metric("Completed", summary.completed)
        cols[1].metric("Work in progress", summary.work_in_progress)
        cols[2].metric("Not completed", summary.not_completed)
        cols[3].metric("Total revenue", format_amount(summary.total_revenue))
    if widgets.deadline_tracker and state.notifications:
        st.subheader("Deadline tracker")
        for item in state.notifications:
            st.write(f"**{item.title}**: {item.message}")
    if widgets.compliance_pie_chart:
        breakdown = {status.value: count for status, count in summary.status_breakdown().items()}
        st.bar_chart(pd.Series(breakdown, name="records"))
    if widgets.pending_table and summary.pending:
        st.subheader("Pending compliances")
        st.dataframe(pd.DataFrame(compliances_to_rows(summary.pending)))
    if user.is_leadership and st.button("Generate AI insights"):
        with GeminiInsightProvider.from_settings() as provider:
            insights = ComplianceInsightsUseCase(provider).execute(state.compliances)
        for line in insights:
            st.write(f"- {line}")


def show_compliance() -> None:
    user = session.user
    st.header("Compliance Directory")
    frequencies = [ALL] + [f.value for f in Frequency]
    default = user.preferences.default_frequency_filter
    frequency = st.selectbox("Frequency", frequencies, index=frequencies.index(default) if default in frequencies else 0)
    search = st.text_input("Search")
    records = filter_compliances(state.compliances, frequency, search)
    st.dataframe(pd.DataFrame(compliances_to_rows(records)))
    if not records:
        return

    record_id = st.selectbox("Record", [r.id for r in records], format_func=lambda rid: next(r.name for r in records if r.id == rid))
    record = next(r for r in records if r.id == record_id)
    with st.form("edit_compliance"):
        if user.role == UserRole.AUDITOR:
            statuses = [s.value for s in ComplianceStatus]
            status = st.selectbox("Status", statuses, index=statuses.index(record.status.value))
            completed_on = st.date_input("Actual completion date", value=record.actual_completion_date or date.today())
            reason = st.text_area("Delay reason", value=record.delay_reason or "")
            updates: dict[str, object] = {"status": status}
            if status == ComplianceStatus.COMPLETED.value:
                updates["actual_completion_date"] = completed_on
            if status == ComplianceStatus.NOT_COMPLETED.value:
                updates["delay_reason"] = reason or None
        else:
            remark = st.text_area("Leadership remark", value=record.leadership_remarks or "")
            updates = {"leadership_remarks": remark or None}
        if st.form_submit_button("Save"):
            try:
                result = session.update_compliance(record.id, updates)
            except ComplianceTrackerError as exc:
                st.error(str(exc))
            else:
                st.toast(f"Updated: {record.name}" if result.found else "Record not found")
                st.rerun()


def show_revenue() -> None:
    user = session.user
    st.header("Revenue Records")
    category = st.selectbox("Category", revenue_categories(state.revenues))
    records = filter_revenues(state.revenues, category)
    timeline = revenue_timeline(records)
    if timeline:
        st.area_chart(pd.DataFrame({"date": [r.date for r in timeline], "amount": [float(r.amount) for r in timeline]}).set_index("date"))
    st.dataframe(pd.DataFrame(revenues_to_rows(list(reversed(records)))))
    if user.role != UserRole.AUDITOR:
        return
    with st.form("add_revenue"):
        entry_date = st.date_input("Date", value=date.today())
        source = st.text_input("Source")
        mode = st.text_input("Mode", value="Wire Transfer")
        amount = st.text_input("Amount")
        entry_category = st.text_input("Category", value="Consulting")
        if st.form_submit_button("Add entry"):
            request = RevenueEntryRequest(source=source, amount=amount, date=entry_date, mode=mode, category=entry_category)
            try:
                result = session.add_revenue(request)
            except ComplianceTrackerError as exc:
                st.error(str(exc))
            else:
                added = result.records[-1]
                st.toast(f"Added {format_amount(added.amount)} from {added.source}")
                st.rerun()


def show_reports() -> None:
    user = session.user
    st.header("Audit Reports")
    now = datetime.now(SETTINGS.timezone)
    for report in FINALIZED_REPORTS:
        st.download_button(
            f"{report.title} ({report.period}) CSV",
            data=render_finalized_report_csv(report),
            file_name=f"{'_'.join(report.title.split())}_Data.csv",
            mime="text/csv",
            key=f"finalized-{report.id}",
        )
    exported = export_report(
        user.preferences.preferred_report_format,
        "Consolidated Compliance Report",
        state.compliances,
        state.revenues,
        state.audit_log,
        generated_at=now,
    )
    st.download_button(f"Download consolidated report ({user.preferences.preferred_report_format.value})", data=exported.content, file_name=exported.file_name, mime=exported.mime)


def show_audit_trail() -> None:
    st.header("System Audit Trail")
    st.caption(f"{len(state.audit_log)} total logs")
    term = st.text_input("Search by user, record or action")
    rows = audit_log_to_rows(search_audit_log(state.audit_log, term))
    if rows:
        st.dataframe(pd.DataFrame(rows))
    else:
        st.info("No audit entries yet.")


def show_settings() -> None:
    prefs = session.user.preferences
    st.header("User Preferences")
    with st.form("preferences"):
        frequencies = [ALL] + [f.value for f in Frequency]
        default_filter = st.selectbox("Default frequency filter", frequencies, index=frequencies.index(prefs.default_frequency_filter))
        formats = [f.value for f in ReportFormat]
        report_format = st.selectbox("Preferred report format", formats, index=formats.index(prefs.preferred_report_format.value))
        widgets = prefs.visible_widgets
        stats = st.checkbox("Stats summary", widgets.stats_summary)
        pie = st.checkbox("Compliance chart", widgets.compliance_pie_chart)
        pending = st.checkbox("Pending table", widgets.pending_table)
        tracker = st.checkbox("Deadline tracker", widgets.deadline_tracker)
        types = prefs.notifications.types
        missed = st.checkbox("Missed deadlines", types.missed_deadlines)
        remarks = st.checkbox("New remarks", types.new_remarks)
        upcoming = st.checkbox("Upcoming deadlines", types.upcoming_deadlines)
        revenue = st.checkbox("Revenue alerts", types.revenue_alerts)
        channels = prefs.notifications.channels
        in_app = st.checkbox("In-app notifications", channels.in_app)
        email = st.checkbox("E-mail notifications", channels.email)
        if st.form_submit_button("Save preferences"):
            updated = replace(
                prefs,
                default_frequency_filter=default_filter,
                preferred_report_format=ReportFormat(report_format),
                visible_widgets=replace(widgets, stats_summary=stats, compliance_pie_chart=pie, pending_table=pending, deadline_tracker=tracker),
                notifications=replace(
                    prefs.notifications,
                    types=replace(types, missed_deadlines=missed, new_remarks=remarks, upcoming_deadlines=upcoming, revenue_alerts=revenue),
                    channels=replace(channels, in_app=in_app, email=email),
                ),
            )
            session.update_preferences(updated)
            st.toast("Dashboard preferences updated")
            st.rerun()


if state.current_user is None:
    show_login()
else:
    with st.sidebar:
        st.subheader(state.current_user.name)
        st.caption(f"User Role: {state.current_user.role.value}")
        st.session_state["view"] = st.radio("Navigate", VIEWS, index=VIEWS.index(st.session_state["view"]))
        st.caption(f"{unread_count(state.notifications)} unread notifications")
        for item in state.notifications:
            if not item.read and st.button(item.message, key=f"read-{item.id}"):
                session.mark_read(item.id)
                st.rerun()
        if st.button("Sign out"):
            session.logout()
            st.rerun()

    pages = {
        "Dashboard": show_dashboard,
        "Compliance Tracker": show_compliance,
        "Revenue Records": show_revenue,
        "Audit Reports": show_reports,
        "Audit Trail": show_audit_trail,
        "User Preferences": show_settings,
    }
    pages[st.session_state["view"]]()
