from __future__ import annotations

from intake.ingest.base import UploadedFile, UploadRejected
from intake.ingest.limits import IntakeLimits

NO_FILE_MESSAGE = "No PDF file was uploaded. Please select a PDF file to upload."
WRONG_TYPE_MESSAGE = "Only PDF files are allowed"


def _normalize_content_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def validate_upload(upload: UploadedFile | None, limits: IntakeLimits) -> UploadedFile:
    if upload is None or not upload.payload:
        raise UploadRejected(NO_FILE_MESSAGE, status_code=400)

    if _normalize_content_type(upload.content_type) not in limits.allowed_content_types:
        raise UploadRejected(WRONG_TYPE_MESSAGE, status_code=415)

    if upload.size > limits.max_upload_bytes:
        limit_mb = limits.max_upload_bytes / (1024 * 1024)
        raise UploadRejected(
            f"The uploaded file is too large. The maximum size is {limit_mb:.0f} MB.",
            status_code=413,
        )
    return upload
