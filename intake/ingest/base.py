from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNABLE_TO_PARSE_MESSAGE = (
    "Unable to parse the PDF file. Please ensure the file is a valid PDF and contains "
    "readable text. You can manually fill out the form instead."
)


@dataclass(frozen=True, slots=True)
class UploadedFile:
    filename: str
    content_type: str
    payload: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.payload)


class UploadRejected(ValueError):
    """The upload was refused before any PDF decoding was attempted."""

    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PdfDecodeError(ValueError):
    """The payload could not be decoded as a text-bearing PDF."""

    def __init__(self, message: str = UNABLE_TO_PARSE_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


@dataclass(slots=True)
class ParseOutcome:
    status_code: int
    payload: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def to_dict(self) -> dict[str, Any]:
        return {"status_code": self.status_code, "payload": dict(self.payload)}
