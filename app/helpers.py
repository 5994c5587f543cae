from __future__ import annotations

import hashlib
from typing import Any, Mapping

import pandas as pd

_CHECKLIST_LABELS = [
    ("passportCollected", "Passport"),
    ("applicationFormCollected", "Application form"),
    ("highschoolTranscriptCollected", "High school transcript"),
    ("collegeTranscriptCollected", "College transcript"),
]

_OUTCOME_LABELS = {
    "confirmed": "Kept as extracted",
    "corrected": "Corrected by reviewer",
    "missed": "Filled in by reviewer",
    "spurious": "Cleared by reviewer",
    "empty": "Not provided",
}


def list_to_csv(items: Any) -> str:
    if not isinstance(items, list):
        return ""
    return ", ".join(str(item) for item in items if str(item).strip())


def csv_to_list(value: Any) -> list[str]:
    items = [item.strip() for item in str(value or "").replace(";", ",").split(",")]
    return list(dict.fromkeys(item for item in items if item))


def checklist_summary(form: Mapping[str, Any]) -> list[str]:
    return [
        f"{label}: {'collected' if form.get(field) else 'missing'}"
        for field, label in _CHECKLIST_LABELS
    ]


def outcome_label(outcome: str) -> str:
    return _OUTCOME_LABELS.get(outcome, outcome)


def outcomes_frame(comparison: Mapping[str, str], *, include_empty: bool = False) -> pd.DataFrame:
    rows = [
        {"field": field, "outcome": outcome_label(outcome)}
        for field, outcome in comparison.items()
        if include_empty or outcome != "empty"
    ]
    return pd.DataFrame(rows, columns=["field", "outcome"])


def upload_fingerprint(name: str, payload: bytes) -> str:
    """Identity of an uploaded file; a re-upload under the same name with new bytes differs."""

    return f"{name}:{hashlib.sha256(payload).hexdigest()}"
