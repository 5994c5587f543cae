from __future__ import annotations

from .base import ParseOutcome, PdfDecodeError, UploadedFile, UploadRejected
from .handler import parse_application_upload
from .limits import IntakeLimits, load_limits
from .pdf_text import extract_text_from_pdf
from .upload import validate_upload

__all__ = [
    "IntakeLimits",
    "ParseOutcome",
    "PdfDecodeError",
    "UploadRejected",
    "UploadedFile",
    "extract_text_from_pdf",
    "load_limits",
    "parse_application_upload",
    "validate_upload",
]
