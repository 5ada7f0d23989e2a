"""Storage helpers for the statutory checklist with local overrides."""
from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from compliance_tracker.domain.due_dates import parse_due_date
from compliance_tracker.domain.errors import InvalidDateError
from compliance_tracker.domain.models import ChecklistItem, Criticality, Frequency
from compliance_tracker.infrastructure.seed.mock_data import COMPLIANCE_CHECKLIST

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).resolve().parents[3] / "checklist_override.json"


def _normalize_entries(raw: Any) -> dict[str, dict[str, Any]]:
    """Accept either a list of items or a mapping keyed by item name."""
    if isinstance(raw, dict):
        items = [{"name": key, **(value or {})} for key, value in raw.items() if isinstance(value, (dict, type(None)))]
    elif isinstance(raw, list):
        items = [item for item in raw if isinstance(item, dict)]
    else:
        return {}
    normalized: dict[str, dict[str, Any]] = {}
    for item in items:
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        normalized[name] = item
    return normalized


def _apply_override(base: ChecklistItem | None, name: str, entry: dict[str, Any]) -> ChecklistItem | None:
    try:
        fields: dict[str, Any] = {}
        if "frequency" in entry:
            fields["frequency"] = Frequency(entry["frequency"])
        if "criticality" in entry:
            fields["criticality"] = Criticality(entry["criticality"])
        if "due_date" in entry:
            fields["due_date"] = parse_due_date(str(entry["due_date"]))
        if base is not None:
            return replace(base, **fields)
        return ChecklistItem(name=name, **fields)
    except (ValueError, TypeError, InvalidDateError) as exc:
        logger.warning("Ignoring checklist override for %s: %s", name, exc)
        return base


def load_checklist(path: Path | None = None) -> list[ChecklistItem]:
    override_path = path or DEFAULT_PATH
    checklist = list(COMPLIANCE_CHECKLIST)
    if not override_path.exists():
        return checklist
    try:
        data = json.loads(override_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Checklist override %s is not valid JSON; using defaults", override_path)
        return checklist

    overrides = _normalize_entries(data)
    index = {item.name: pos for pos, item in enumerate(checklist)}
    for name, entry in overrides.items():
        if name in index:
            merged = _apply_override(checklist[index[name]], name, entry)
            checklist[index[name]] = merged
        else:
            created = _apply_override(None, name, entry)
            if created is not None:
                checklist.append(created)
    return checklist
