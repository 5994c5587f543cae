from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping, Union

AdmissionValue = Union[str, bool, list[str]]
PartialRecord = dict[str, AdmissionValue]

TEXT_FIELDS = [
    "firstName",
    "lastName",
    "email",
    "phone",
    "major",
    "desiredAdmissionTerm",
    "homestayAddress",
]
DATE_FIELDS = ["dateOfBirth", "bostonArrivalDate", "expectedGraduationDate"]
LIST_FIELDS = ["desiredUniversities", "shorelightUniversities"]
FLAG_FIELDS = [
    "passportCollected",
    "applicationFormCollected",
    "highschoolTranscriptCollected",
    "collegeTranscriptCollected",
    "shorelightApplication",
    "stage2Services",
]

ADMISSION_FIELDS = [
    "firstName",
    "lastName",
    "email",
    "phone",
    "dateOfBirth",
    "passportCollected",
    "applicationFormCollected",
    "highschoolTranscriptCollected",
    "collegeTranscriptCollected",
    "desiredAdmissionTerm",
    "desiredUniversities",
    "major",
    "homestayAddress",
    "bostonArrivalDate",
    "shorelightApplication",
    "shorelightUniversities",
    "stage2Services",
    "expectedGraduationDate",
]

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

_FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "dateOfBirth": "Date of birth",
    "bostonArrivalDate": "Boston arrival date",
    "expectedGraduationDate": "Expected graduation date",
    "desiredUniversities": "Desired universities",
    "shorelightUniversities": "Shorelight universities",
}


def default_student_form() -> dict[str, Any]:
    """Blank form state for every admission field."""

    form: dict[str, Any] = {}
    for field in ADMISSION_FIELDS:
        if field in LIST_FIELDS:
            form[field] = []
        elif field in FLAG_FIELDS:
            form[field] = False
        else:
            form[field] = ""
    return form


def has_value(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def prefill_form(form: Mapping[str, Any], extracted: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a partial record over existing form state without clobbering it with blanks."""

    merged = dict(form)
    for field in ADMISSION_FIELDS:
        value = extracted.get(field)
        if not has_value(value):
            continue
        if field in LIST_FIELDS:
            merged[field] = [str(item) for item in value]
        elif field in FLAG_FIELDS:
            merged[field] = bool(value)
        else:
            merged[field] = str(value)
    return merged


def _is_iso_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_student_form(form: Mapping[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}

    for field in ("firstName", "lastName"):
        if not str(form.get(field) or "").strip():
            errors[field] = f"{_FIELD_LABELS[field]} is required. Please enter the student's {_FIELD_LABELS[field].lower()}."

    email = str(form.get("email") or "").strip()
    if email and not _EMAIL_PATTERN.match(email):
        errors["email"] = "Please enter a valid email address (e.g., student@example.com)."

    for field in DATE_FIELDS:
        raw = str(form.get(field) or "").strip()
        if raw and not _is_iso_date(raw):
            errors[field] = f"Please enter a valid {_FIELD_LABELS[field].lower()} format (YYYY-MM-DD)."

    for field in LIST_FIELDS:
        items = form.get(field)
        if items is None:
            continue
        if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
            errors[field] = f"{_FIELD_LABELS[field]} must be a list of names."

    return errors


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def build_submission(form: Mapping[str, Any]) -> dict[str, Any]:
    submission: dict[str, Any] = {}
    for field in ADMISSION_FIELDS:
        value = form.get(field)
        if field in LIST_FIELDS:
            items = value if isinstance(value, list) else []
            submission[field] = [str(item).strip() for item in items if str(item).strip()]
        elif field in FLAG_FIELDS:
            submission[field] = bool(value)
        elif field in ("firstName", "lastName"):
            submission[field] = str(value or "").strip()
        else:
            submission[field] = _optional_text(value)
    return submission
