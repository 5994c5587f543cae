from __future__ import annotations

from collections import Counter
from typing import Any, Mapping

from intake.normalize.schema import ADMISSION_FIELDS, FLAG_FIELDS, LIST_FIELDS

CONFIRMED = "confirmed"
CORRECTED = "corrected"
MISSED = "missed"
SPURIOUS = "spurious"
EMPTY = "empty"
OUTCOMES = (CONFIRMED, CORRECTED, MISSED, SPURIOUS, EMPTY)


def _norm_text(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).strip().lower().split())


def _normalized(field: str, value: Any) -> Any:
    if field in FLAG_FIELDS:
        return bool(value)
    if field in LIST_FIELDS:
        if not isinstance(value, (list, tuple)):
            return frozenset()
        return frozenset(_norm_text(item) for item in value if _norm_text(item))
    return _norm_text(value)


def compare_with_review(
    extracted: Mapping[str, Any],
    reviewed: Mapping[str, Any],
) -> dict[str, str]:
    """Classify every admission field by what the reviewer did with the pre-filled value."""

    outcomes: dict[str, str] = {}
    for field in ADMISSION_FIELDS:
        before = _normalized(field, extracted.get(field))
        after = _normalized(field, reviewed.get(field))
        if not before and not after:
            outcomes[field] = EMPTY
        elif not before:
            outcomes[field] = MISSED
        elif not after:
            outcomes[field] = SPURIOUS
        elif before == after:
            outcomes[field] = CONFIRMED
        else:
            outcomes[field] = CORRECTED
    return outcomes


def summarize_review_outcomes(comparisons: list[dict[str, str]]) -> dict[str, Any]:
    per_field: dict[str, Counter[str]] = {field: Counter() for field in ADMISSION_FIELDS}
    totals: Counter[str] = Counter()
    for comparison in comparisons:
        for field, outcome in comparison.items():
            if field not in per_field:
                continue
            per_field[field][outcome] += 1
            totals[outcome] += 1

    prefilled = totals[CONFIRMED] + totals[CORRECTED] + totals[SPURIOUS]
    expected = totals[CONFIRMED] + totals[CORRECTED] + totals[MISSED]
    return {
        "documents": len(comparisons),
        "totals": {outcome: totals[outcome] for outcome in OUTCOMES},
        "per_field": {
            field: {outcome: counts[outcome] for outcome in OUTCOMES}
            for field, counts in per_field.items()
        },
        "prefill_precision": (totals[CONFIRMED] / prefilled) if prefilled else 0.0,
        "prefill_recall": (totals[CONFIRMED] / expected) if expected else 0.0,
    }
