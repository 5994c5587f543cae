from __future__ import annotations

from typing import Callable

import pytest


def _build_pdf(pages: list[list[str]]) -> bytes:
    """Minimal single-font PDF with one text line per entry, top to bottom."""

    page_count = len(pages)
    font_id = 3 + 2 * page_count
    page_ids = [3 + 2 * index for index in range(page_count)]

    objects: dict[int, bytes] = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        2: (
            "<< /Type /Pages /Kids ["
            + " ".join(f"{page_id} 0 R" for page_id in page_ids)
            + f"] /Count {page_count} >>"
        ).encode("latin-1"),
        font_id: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    for page_id, lines in zip(page_ids, pages):
        content_id = page_id + 1
        commands = ["BT", "/F1 12 Tf", "72 720 Td"]
        for index, line in enumerate(lines):
            if index:
                commands.append("0 -18 Td")
            commands.append(f"({line}) Tj")
        commands.append("ET")
        stream = "\n".join(commands).encode("latin-1")
        objects[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {content_id} 0 R >>"
        ).encode("latin-1")
        objects[content_id] = (
            f"<< /Length {len(stream)} >>\nstream\n".encode("latin-1") + stream + b"\nendstream"
        )

    body = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for object_id in sorted(objects):
        offsets[object_id] = len(body)
        body += f"{object_id} 0 obj\n".encode("latin-1") + objects[object_id] + b"\nendobj\n"

    xref_offset = len(body)
    size = max(objects) + 1
    body += f"xref\n0 {size}\n0000000000 65535 f \n".encode("latin-1")
    for object_id in range(1, size):
        body += f"{offsets[object_id]:010d} 00000 n \n".encode("latin-1")
    body += (
        f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return bytes(body)


@pytest.fixture
def make_pdf() -> Callable[[list[list[str]]], bytes]:
    return _build_pdf
