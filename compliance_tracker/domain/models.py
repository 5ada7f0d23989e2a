"""Domain models for compliance and revenue tracking.

These dataclasses capture the canonical schema of the records held in a
dashboard session: statutory compliance items, revenue entries, the audit
trail and derived reminder notifications.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Union


class UserRole(str, Enum):
    CEO_CFO = "CEO / CFO"
    MANAGER = "Manager"
    AUDITOR = "Auditor"


class ComplianceStatus(str, Enum):
    COMPLETED = "Completed"
    WIP = "Work In Progress"
    NOT_COMPLETED = "Not Completed"


class Criticality(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Frequency(str, Enum):
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    ANNUAL = "Annual"


class NotificationType(str, Enum):
    URGENT = "urgent"
    REMINDER = "reminder"
    SUCCESS = "success"


class ReportFormat(str, Enum):
    PDF = "PDF"
    XLS = "XLS"
    CSV = "CSV"


class Urgency(str, Enum):
    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    NONE = "none"


@dataclass(frozen=True)
class DayOfMonth:
    """Recurring due date: the given day of whichever month is in context."""

    day: int

    def __str__(self) -> str:
        return str(self.day)


@dataclass(frozen=True)
class CalendarDate:
    """One-off due date on a fixed calendar day."""

    value: date

    def __str__(self) -> str:
        return self.value.isoformat()


DueDate = Union[DayOfMonth, CalendarDate]

# Values allowed on either side of a field-level diff.
DiffValue = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class ChecklistItem:
    """Template for a statutory obligation before it is seeded as a record."""

    name: str
    frequency: Frequency
    criticality: Criticality
    due_date: DueDate


@dataclass(frozen=True)
class ComplianceRecord:
    id: str
    name: str
    due_date: DueDate
    frequency: Frequency
    status: ComplianceStatus
    criticality: Criticality
    last_updated: datetime
    actual_completion_date: date | None = None
    delay_reason: str | None = None
    delay_days: int | None = None
    expected_completion_date: date | None = None
    auditor_remarks: str | None = None
    leadership_remarks: str | None = None
    other_observations: str | None = None


@dataclass(frozen=True)
class RevenueRecord:
    id: str
    date: date
    source: str
    mode: str
    amount: Decimal
    category: str


@dataclass(frozen=True)
class VisibleWidgets:
    stats_summary: bool = True
    compliance_pie_chart: bool = True
    pending_table: bool = True
    deadline_tracker: bool = True


@dataclass(frozen=True)
class NotificationTypes:
    missed_deadlines: bool = True
    new_remarks: bool = True
    upcoming_deadlines: bool = True
    revenue_alerts: bool = False


@dataclass(frozen=True)
class NotificationChannels:
    in_app: bool = True
    email: bool = True


@dataclass(frozen=True)
class NotificationSettings:
    types: NotificationTypes = field(default_factory=NotificationTypes)
    channels: NotificationChannels = field(default_factory=NotificationChannels)


@dataclass(frozen=True)
class UserPreferences:
    default_frequency_filter: str = "All"
    preferred_report_format: ReportFormat = ReportFormat.PDF
    visible_widgets: VisibleWidgets = field(default_factory=VisibleWidgets)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)


@dataclass(frozen=True)
class User:
    id: str
    name: str
    role: UserRole
    email: str
    preferences: UserPreferences = field(default_factory=UserPreferences)

    @property
    def is_leadership(self) -> bool:
        return self.role in (UserRole.CEO_CFO, UserRole.MANAGER)


@dataclass(frozen=True)
class FieldChange:
    field: str
    old_value: DiffValue
    new_value: DiffValue


@dataclass(frozen=True)
class AuditLogEntry:
    """One immutable line of the audit trail."""

    id: str
    timestamp: datetime
    user_id: str
    user_name: str
    user_role: UserRole
    action: str
    target_id: str
    target_name: str
    changes: tuple[FieldChange, ...]


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    type: NotificationType
    timestamp: datetime
    read: bool = False
    target_id: str | None = None
