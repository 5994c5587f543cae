from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_TEXT_CHARS = 200_000
DEFAULT_ALLOWED_CONTENT_TYPES = ("application/pdf",)


@dataclass(frozen=True, slots=True)
class IntakeLimits:
    max_upload_bytes: int
    allowed_content_types: tuple[str, ...]
    max_text_chars: int

    def __post_init__(self) -> None:
        for field_name in ("max_upload_bytes", "max_text_chars"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Intake limit '{field_name}' must be an integer.")
            if value <= 0:
                raise ValueError(f"Intake limit '{field_name}' must be positive.")
        if not self.allowed_content_types:
            raise ValueError("Intake limit 'allowed_content_types' must not be empty.")

    @classmethod
    def baseline(cls) -> IntakeLimits:
        return cls(
            max_upload_bytes=DEFAULT_MAX_UPLOAD_BYTES,
            allowed_content_types=DEFAULT_ALLOWED_CONTENT_TYPES,
            max_text_chars=DEFAULT_MAX_TEXT_CHARS,
        )

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> IntakeLimits:
        values = payload or {}
        baseline = cls.baseline()
        content_types = values.get("allowed_content_types", baseline.allowed_content_types)
        if isinstance(content_types, str):
            content_types = [content_types]
        return cls(
            max_upload_bytes=int(values.get("max_upload_bytes", baseline.max_upload_bytes)),
            allowed_content_types=tuple(
                str(item).strip().lower() for item in content_types if str(item).strip()
            ),
            max_text_chars=int(values.get("max_text_chars", baseline.max_text_chars)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_upload_bytes": self.max_upload_bytes,
            "allowed_content_types": list(self.allowed_content_types),
            "max_text_chars": self.max_text_chars,
        }


def load_limits(path: Path | None) -> IntakeLimits:
    if path is None or not path.exists():
        return IntakeLimits.baseline()
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Intake limits file '{path}' must contain a JSON object.")
    return IntakeLimits.from_mapping(payload)
