"""Heuristic field extraction from application-form text."""

from intake.extract.engine import (
    LabelRule,
    detect_document_flags,
    detect_partner_universities,
    detect_shorelight_application,
    extract,
    extract_application_fields,
    extract_array,
    extract_date,
    extract_desired_universities,
    extract_field,
    run_chain,
    try_parse_date,
)

__all__ = [
    "LabelRule",
    "detect_document_flags",
    "detect_partner_universities",
    "detect_shorelight_application",
    "extract",
    "extract_application_fields",
    "extract_array",
    "extract_date",
    "extract_desired_universities",
    "extract_field",
    "run_chain",
    "try_parse_date",
]
