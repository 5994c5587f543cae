from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Sequence

import pandas as pd

from intake.extract import rules
from intake.normalize.schema import PartialRecord, has_value

logger = logging.getLogger(__name__)

_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_LIST_SEPARATOR_PATTERN = re.compile(r"[,;]")
_DATE_SEPARATOR_PATTERN = re.compile(r"[/.\-]")
_YEAR_ONLY_PATTERN = re.compile(r"^\d{4}$")
_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%m.%d.%Y",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%m/%d/%y",
    "%m-%d-%y",
    "%Y%m%d",
)

Extractor = Callable[[re.Match[str]], Any]


@dataclass(frozen=True, slots=True)
class LabelRule:
    """One step of a priority chain: a label pattern and what to take from its match.

    The extractor returns ``None`` to hand over to the next rule in the chain.
    """

    pattern: re.Pattern[str]
    extract: Extractor


def run_chain(text: str, chain: Sequence[LabelRule]) -> Any:
    for rule in chain:
        match = rule.pattern.search(text)
        if match is None:
            continue
        value = rule.extract(match)
        if value is not None:
            return value
    return None


def _first_group(match: re.Match[str]) -> str | None:
    captured = match.group(1)
    if not captured or not captured.strip():
        return None
    return captured.strip()


def _split_items(raw: str) -> list[str]:
    return [item.strip() for item in _LIST_SEPARATOR_PATTERN.split(raw) if item.strip()]


def try_parse_date(raw: str) -> str | None:
    """Normalize a captured date to ``YYYY-MM-DD``; ``None`` when it cannot be read."""

    cleaned = raw.strip().strip("./-")
    if not cleaned:
        return None
    if _ISO_DATE_PATTERN.match(cleaned):
        return cleaned

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue

    # Bare digit runs other than a year are too ambiguous for the general parser.
    if not _DATE_SEPARATOR_PATTERN.search(cleaned) and not _YEAR_ONLY_PATTERN.match(cleaned):
        return None
    try:
        parsed = pd.to_datetime(cleaned, errors="coerce")
    except (OverflowError, TypeError, ValueError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date().isoformat()


def _date_group(match: re.Match[str]) -> str | None:
    parsed = try_parse_date(match.group(1) or "")
    if parsed is None:
        logger.debug("Unreadable date %r for pattern %s", match.group(1), match.re.pattern)
    return parsed


def _university_group(match: re.Match[str]) -> list[str] | None:
    body = match.group(2)
    if not body:
        return None
    items = [
        item
        for item in _split_items(body)
        if len(item) < rules.MAX_UNIVERSITY_NAME_LENGTH
    ]
    deduped = list(dict.fromkeys(items))
    return deduped or None


def extract_field(text: str, patterns: Sequence[re.Pattern[str]]) -> str | None:
    return run_chain(text, [LabelRule(pattern, _first_group) for pattern in patterns])


def extract_array(text: str, pattern: re.Pattern[str]) -> list[str]:
    match = pattern.search(text)
    if match is None or not match.group(1):
        return []
    return _split_items(match.group(1))


def extract_date(text: str, patterns: Sequence[re.Pattern[str]]) -> str | None:
    return run_chain(text, [LabelRule(pattern, _date_group) for pattern in patterns])


def extract_desired_universities(text: str) -> list[str]:
    chain = [LabelRule(pattern, _university_group) for pattern in rules.UNIVERSITY_LIST_PATTERNS]
    return run_chain(text, chain) or []


def detect_partner_universities(text: str) -> list[str]:
    return [name for name, pattern in rules.PARTNER_UNIVERSITIES if pattern.search(text)]


def detect_shorelight_application(text: str) -> bool:
    if rules.SHORELIGHT_KEYWORD.search(text):
        return True
    return bool(detect_partner_universities(text))


def detect_document_flags(text: str) -> dict[str, bool]:
    return {
        field: bool(pattern.search(text))
        for field, pattern in rules.DOCUMENT_FLAG_KEYWORDS.items()
    }


_TEXT_FIELD_PATTERNS = [
    ("firstName", rules.FIRST_NAME_PATTERNS),
    ("lastName", rules.LAST_NAME_PATTERNS),
    ("email", rules.EMAIL_PATTERNS),
    ("phone", rules.PHONE_PATTERNS),
]
_DATE_FIELD_PATTERNS = [
    ("dateOfBirth", rules.DATE_OF_BIRTH_PATTERNS),
]
_PROGRAM_FIELD_PATTERNS = [
    ("major", rules.MAJOR_PATTERNS),
    ("desiredAdmissionTerm", rules.ADMISSION_TERM_PATTERNS),
]
_ARRIVAL_FIELD_PATTERNS = [
    ("homestayAddress", rules.HOMESTAY_ADDRESS_PATTERNS),
]
_TRAVEL_DATE_FIELD_PATTERNS = [
    ("bostonArrivalDate", rules.BOSTON_ARRIVAL_PATTERNS),
    ("expectedGraduationDate", rules.EXPECTED_GRADUATION_PATTERNS),
]


def _put(record: PartialRecord, field: str, value: Any) -> None:
    if has_value(value):
        record[field] = value


def extract_application_fields(raw_text: str) -> PartialRecord:
    """Best-effort admission record from the decoded text of an application PDF.

    Only positively extracted fields are present: no blank strings, no empty lists and
    no ``False`` flags. The result is meant to pre-fill a form for human review.
    """

    text = raw_text or ""
    record: PartialRecord = {}
    if not text.strip():
        return record

    for field, patterns in _TEXT_FIELD_PATTERNS:
        _put(record, field, extract_field(text, patterns))
    for field, patterns in _DATE_FIELD_PATTERNS:
        _put(record, field, extract_date(text, patterns))
    for field, patterns in _PROGRAM_FIELD_PATTERNS:
        _put(record, field, extract_field(text, patterns))

    _put(record, "desiredUniversities", extract_desired_universities(text))
    _put(record, "shorelightApplication", detect_shorelight_application(text))
    _put(record, "shorelightUniversities", detect_partner_universities(text))

    for field, patterns in _ARRIVAL_FIELD_PATTERNS:
        _put(record, field, extract_field(text, patterns))
    for field, patterns in _TRAVEL_DATE_FIELD_PATTERNS:
        _put(record, field, extract_date(text, patterns))

    for field, flag in detect_document_flags(text).items():
        _put(record, field, flag)

    return record


extract = extract_application_fields
