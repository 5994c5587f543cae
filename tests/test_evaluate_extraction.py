from __future__ import annotations

import json
from pathlib import Path

import pytest

import scripts.evaluate_extraction as eval_module
from intake.ingest.base import ParseOutcome
from scripts.evaluate_extraction import _load_reviewed, evaluate_documents, pair_documents


def test_pair_documents_matches_by_stem_and_skips_unreviewed(tmp_path: Path) -> None:
    input_dir = tmp_path / "applications"
    reviewed_dir = tmp_path / "reviewed"
    input_dir.mkdir()
    reviewed_dir.mkdir()
    (input_dir / "jane.pdf").write_bytes(b"%PDF")
    (input_dir / "zed.pdf").write_bytes(b"%PDF")
    (reviewed_dir / "jane.json").write_text("{}", encoding="utf-8")

    pairs = pair_documents(input_dir, reviewed_dir)

    assert pairs == [(input_dir / "jane.pdf", reviewed_dir / "jane.json")]


def test_load_reviewed_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "jane.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        _load_reviewed(path)


def test_evaluate_documents_summarizes_outcomes(monkeypatch, tmp_path: Path) -> None:
    def _fake_parse(upload, *, limits=None):  # noqa: ANN001
        if upload.filename == "broken.pdf":
            return ParseOutcome(status_code=422, payload={"error": "Unable to parse the PDF file."})
        return ParseOutcome(status_code=200, payload={"firstName": "Jane", "lastName": "Do"})

    monkeypatch.setattr(eval_module, "parse_application_upload", _fake_parse)
    pdf_path = tmp_path / "jane.pdf"
    broken_path = tmp_path / "broken.pdf"
    pdf_path.write_bytes(b"%PDF")
    broken_path.write_bytes(b"%PDF")
    reviewed_path = tmp_path / "jane.json"
    reviewed_path.write_text(json.dumps({"firstName": "Jane", "lastName": "Doe"}), encoding="utf-8")

    summary = evaluate_documents([(pdf_path, reviewed_path), (broken_path, reviewed_path)])

    assert summary["documents"] == 2
    assert summary["totals"]["confirmed"] == 1
    assert summary["totals"]["corrected"] == 1
    assert summary["totals"]["missed"] == 2
    assert [entry["status_code"] for entry in summary["documents_detail"]] == [200, 422]
    assert summary["documents_detail"][0]["outcomes"]["lastName"] == "corrected"
