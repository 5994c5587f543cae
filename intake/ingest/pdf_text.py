from __future__ import annotations

import io

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from intake.ingest.base import PdfDecodeError


def extract_text_from_pdf(payload: bytes) -> str:
    """Concatenated text of every page; page boundaries become blank lines."""

    try:
        reader = PdfReader(io.BytesIO(payload))
        parts: list[str] = []
        for page in reader.pages:
            text = (page.extract_text() or "").strip()
            if text:
                parts.append(text)
    except (PyPdfError, KeyError, ValueError) as exc:
        raise PdfDecodeError() from exc
    return "\n\n".join(parts).strip()
