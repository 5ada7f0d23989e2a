"""Errors raised by the compliance tracker core."""
from __future__ import annotations


class ComplianceTrackerError(Exception):
    """Base class for all tracker errors."""


class InvalidDateError(ComplianceTrackerError, ValueError):
    """A due date or completion date could not be interpreted."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date value: {value!r}")
        self.value = value


class PermissionDeniedError(ComplianceTrackerError):
    """The acting user's role may not perform the requested change."""


class NoActiveUserError(ComplianceTrackerError):
    """An operation needs a signed-in user but the session has none."""


class InvalidRevenueEntryError(ComplianceTrackerError, ValueError):
    """A revenue form submission is missing required data."""


class InsightServiceError(ComplianceTrackerError):
    """The optional insight service failed or returned an unusable payload."""
