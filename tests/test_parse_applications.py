from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pandas as pd

import scripts.parse_applications as parse_module
from intake.ingest.base import ParseOutcome, UploadedFile
from scripts.parse_applications import _run_status, run_parse


def _fake_parse(upload: UploadedFile, *, limits=None) -> ParseOutcome:  # noqa: ANN001
    if upload.filename.startswith("bad"):
        return ParseOutcome(status_code=422, payload={"error": "Unable to parse the PDF file."})
    return ParseOutcome(
        status_code=200,
        payload={"firstName": upload.filename.split(".")[0].title(), "passportCollected": True},
    )


def _write_inputs(input_dir: Path, names: list[str]) -> None:
    input_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (input_dir / name).write_bytes(b"%PDF-1.4 placeholder")


def test_run_status_transitions() -> None:
    assert _run_status(3, 0) == "success"
    assert _run_status(2, 1) == "partial"
    assert _run_status(0, 2) == "failed"
    assert _run_status(0, 0) == "success"


def test_run_parse_writes_table_and_partial_report(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(parse_module, "parse_application_upload", _fake_parse)
    input_dir = tmp_path / "applications"
    output_dir = tmp_path / "processed"
    _write_inputs(input_dir, ["jane.pdf", "bad.pdf", "notes.txt"])

    report = run_parse(input_dir=input_dir, output_dir=output_dir, date=date(2024, 8, 15))

    assert report["status"] == "partial"
    assert report["files"]["attempted_count"] == 2
    assert report["files"]["succeeded"] == ["jane.pdf"]
    assert report["files"]["failed"] == ["bad.pdf"]
    assert report["exception_summary"] is None

    table_path = Path(report["artifact_paths"]["table"])
    assert table_path.name == "applications_20240815.csv"
    table = pd.read_csv(table_path)
    assert table["source_file"].tolist() == ["jane.pdf"]
    assert table.loc[0, "firstName"] == "Jane"

    report_path = Path(report["artifact_paths"]["report"])
    assert report_path.exists()
    assert json.loads(report_path.read_text(encoding="utf-8"))["status"] == "partial"


def test_run_parse_all_successful_is_success(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(parse_module, "parse_application_upload", _fake_parse)
    input_dir = tmp_path / "applications"
    _write_inputs(input_dir, ["ana.pdf", "ben.PDF"])

    report = run_parse(input_dir=input_dir, output_dir=tmp_path / "processed")

    assert report["status"] == "success"
    assert report["files"]["succeeded_count"] == 2


def test_run_parse_with_missing_input_dir_writes_failed_report(tmp_path: Path) -> None:
    output_dir = tmp_path / "processed"

    report = run_parse(input_dir=tmp_path / "missing", output_dir=output_dir)

    assert report["status"] == "failed"
    assert report["exception_summary"]["type"] == "FileNotFoundError"
    assert report["artifact_paths"]["table"] is None
    assert Path(report["artifact_paths"]["report"]).exists()


def test_run_parse_with_only_failures_skips_table(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(parse_module, "parse_application_upload", _fake_parse)
    input_dir = tmp_path / "applications"
    _write_inputs(input_dir, ["bad.pdf"])

    report = run_parse(input_dir=input_dir, output_dir=tmp_path / "processed")

    assert report["status"] == "failed"
    assert report["artifact_paths"]["table"] is None
    assert report["files"]["details"][0]["status_code"] == 422
