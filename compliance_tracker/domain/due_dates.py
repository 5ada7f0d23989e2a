"""Due-date resolution, delay and urgency rules."""
from __future__ import annotations

from datetime import date, datetime, timedelta

from .errors import InvalidDateError
from .models import CalendarDate, DayOfMonth, DueDate, Urgency

DEFAULT_REMINDER_WINDOW_DAYS = 3


def parse_due_date(value: DueDate | str) -> DueDate:
    """Interpret a raw due-date field.

    Short numerals ("7", "15") recur monthly on that day; anything longer must
    be an ISO calendar date.
    """
    if isinstance(value, (DayOfMonth, CalendarDate)):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)
    text = value.strip()
    if not text:
        raise InvalidDateError(value)
    if len(text) <= 2:
        if not text.isdigit():
            raise InvalidDateError(value)
        return DayOfMonth(int(text))
    return CalendarDate(parse_iso_date(text))


def parse_iso_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise InvalidDateError(value) from exc


def resolve_due_date(due: DueDate | str, reference: date) -> date:
    """Return the concrete due date using ``reference`` for month context.

    Days past the end of the month roll into the next one ("31" in February
    lands in March); day 0 is the last day of the previous month.
    """
    due = parse_due_date(due)
    if isinstance(due, CalendarDate):
        return due.value
    first_of_month = date(reference.year, reference.month, 1)
    return first_of_month + timedelta(days=due.day - 1)


def compute_delay_days(due: DueDate | str, actual_completion: date | str) -> int:
    completed_on = parse_iso_date(actual_completion)
    due_on = resolve_due_date(due, completed_on)
    return max((completed_on - due_on).days, 0)


def days_until_due(due: DueDate | str, today: date) -> int:
    return (resolve_due_date(due, today) - today).days


def compute_urgency(
    due: DueDate | str,
    today: date,
    window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
) -> Urgency:
    remaining = days_until_due(due, today)
    if remaining < 0:
        return Urgency.OVERDUE
    if remaining <= window_days:
        return Urgency.UPCOMING
    return Urgency.NONE
