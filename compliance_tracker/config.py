"""Central configuration for the compliance tracker package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path

from compliance_tracker.domain.due_dates import DEFAULT_REMINDER_WINDOW_DAYS
from compliance_tracker.domain.models import UserPreferences

BASE_DIR = Path(__file__).resolve().parent.parent


def _optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


@dataclass(slots=True, frozen=True)
class Settings:
    timezone: timezone
    reminder_window_days: int
    currency_symbol: str
    organization: str
    email_domain: str
    gemini_api_key: str | None
    gemini_model: str
    insight_timeout_seconds: float
    checklist_path: Path | None


def load_settings() -> Settings:
    return Settings(
        timezone=timezone.utc,
        reminder_window_days=int(os.getenv("REMINDER_WINDOW_DAYS", DEFAULT_REMINDER_WINDOW_DAYS)),
        currency_symbol=os.getenv("CURRENCY_SYMBOL", "₹"),
        organization=os.getenv("ORGANIZATION_NAME", "FreshLabs Enterprise"),
        email_domain=os.getenv("EMAIL_DOMAIN", "freshlabs.com"),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
        insight_timeout_seconds=float(os.getenv("INSIGHT_TIMEOUT_SECONDS", "30")),
        checklist_path=_optional_path(os.getenv("COMPLIANCE_CHECKLIST_PATH")),
    )


def default_preferences() -> UserPreferences:
    return UserPreferences()


SETTINGS = load_settings()
