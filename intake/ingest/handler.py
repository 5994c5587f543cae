from __future__ import annotations

import logging

from intake.extract.engine import extract_application_fields
from intake.ingest.base import (
    UNABLE_TO_PARSE_MESSAGE,
    ParseOutcome,
    PdfDecodeError,
    UploadedFile,
    UploadRejected,
)
from intake.ingest.limits import IntakeLimits
from intake.ingest.pdf_text import extract_text_from_pdf
from intake.ingest.upload import validate_upload

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> ParseOutcome:
    return ParseOutcome(status_code=status_code, payload={"error": message})


def parse_application_upload(
    upload: UploadedFile | None,
    *,
    limits: IntakeLimits | None = None,
) -> ParseOutcome:
    """Turn an uploaded application PDF into a pre-fill record or a user-facing error.

    The returned record is untrusted input for a human reviewer and is never stored here.
    """

    resolved_limits = limits or IntakeLimits.baseline()
    try:
        checked = validate_upload(upload, resolved_limits)
    except UploadRejected as exc:
        logger.warning("Rejected upload (%d): %s", exc.status_code, exc.message)
        return _error(exc.status_code, exc.message)

    try:
        text = extract_text_from_pdf(checked.payload)
    except PdfDecodeError as exc:
        logger.warning("Could not decode %s as PDF: %s", checked.filename, exc.__cause__)
        return _error(422, exc.message)
    except Exception:
        logger.exception("Unexpected failure decoding %s.", checked.filename)
        return _error(500, UNABLE_TO_PARSE_MESSAGE)

    if not text.strip():
        logger.warning("No readable text in %s.", checked.filename)
        return _error(422, UNABLE_TO_PARSE_MESSAGE)

    if len(text) > resolved_limits.max_text_chars:
        logger.warning(
            "Truncating text of %s from %d to %d characters.",
            checked.filename,
            len(text),
            resolved_limits.max_text_chars,
        )
        text = text[: resolved_limits.max_text_chars]

    record = extract_application_fields(text)
    logger.info("Parsed %s: %d fields extracted.", checked.filename, len(record))
    return ParseOutcome(status_code=200, payload=record)
