from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from intake.ingest.base import UploadedFile
from intake.ingest.handler import parse_application_upload
from intake.ingest.limits import IntakeLimits, load_limits
from intake.io.artifacts import records_to_frame, write_extraction_table, write_json_atomic

logger = logging.getLogger("parse_applications")

PDF_CONTENT_TYPE = "application/pdf"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract pre-fill records from application PDFs.")
    parser.add_argument("--input-dir", type=Path, default=ROOT_DIR / "data" / "applications")
    parser.add_argument("--output-dir", type=Path, default=ROOT_DIR / "data" / "processed")
    parser.add_argument(
        "--limits",
        type=Path,
        default=None,
        help="Optional JSON file overriding upload and text size limits.",
    )
    parser.add_argument(
        "--date",
        type=str,
        default=None,
        help="Run date in YYYYMMDD format. Defaults to current UTC date.",
    )
    return parser.parse_args()


def _resolve_repo_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return ROOT_DIR / path


def _coerce_run_date(run_date: str | None) -> date:
    if run_date is None:
        return datetime.now(tz=UTC).date()
    return datetime.strptime(run_date, "%Y%m%d").date()


def _exception_summary(exc: Exception) -> dict[str, str]:
    return {"type": type(exc).__name__, "message": str(exc)}


def _list_pdfs(input_dir: Path) -> list[Path]:
    if not input_dir.exists():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    return sorted(path for path in input_dir.iterdir() if path.is_file() and path.suffix.lower() == ".pdf")


def _run_status(succeeded: int, failed: int) -> str:
    if failed == 0:
        return "success"
    if succeeded == 0:
        return "failed"
    return "partial"


def run_parse(
    *,
    input_dir: Path,
    output_dir: Path,
    limits: IntakeLimits | None = None,
    date: date | None = None,
) -> dict[str, Any]:
    started_at = datetime.now(tz=UTC)
    resolved_input_dir = _resolve_repo_path(input_dir)
    resolved_output_dir = _resolve_repo_path(output_dir)
    resolved_limits = limits or IntakeLimits.baseline()
    effective_run_date = date or started_at.date()
    report_path = resolved_output_dir / f"parse_report_{started_at.strftime('%Y%m%dT%H%M%SZ')}.json"

    files: list[dict[str, Any]] = []
    rows: list[dict[str, Any]] = []
    table_path: Path | None = None
    run_exception: dict[str, str] | None = None

    try:
        for pdf_path in _list_pdfs(resolved_input_dir):
            file_report: dict[str, Any] = {"file": pdf_path.name, "status": "failed", "fields": 0}
            try:
                upload = UploadedFile(
                    filename=pdf_path.name,
                    content_type=PDF_CONTENT_TYPE,
                    payload=pdf_path.read_bytes(),
                )
                outcome = parse_application_upload(upload, limits=resolved_limits)
                file_report["status_code"] = outcome.status_code
                if outcome.ok:
                    file_report["status"] = "succeeded"
                    file_report["fields"] = len(outcome.payload)
                    rows.append({"source_file": pdf_path.name, **outcome.payload})
                else:
                    file_report["error"] = outcome.payload.get("error")
            except OSError as exc:
                file_report["exception_summary"] = _exception_summary(exc)
                logger.exception("Could not read %s. Continuing with remaining files.", pdf_path)
            files.append(file_report)
            logger.info("File=%s status=%s fields=%d", pdf_path.name, file_report["status"], file_report["fields"])

        if rows:
            table_path = write_extraction_table(
                records_to_frame(rows),
                output_dir=resolved_output_dir,
                run_date=effective_run_date,
            )
        else:
            logger.warning("No application PDFs were parsed; extraction table skipped.")
    except Exception as exc:
        run_exception = _exception_summary(exc)
        logger.exception("Parse run failed after partial progress.")
    finally:
        finished_at = datetime.now(tz=UTC)
        succeeded = [entry["file"] for entry in files if entry["status"] == "succeeded"]
        failed = [entry["file"] for entry in files if entry["status"] != "succeeded"]
        if run_exception is not None:
            status = "partial" if succeeded else "failed"
        else:
            status = _run_status(len(succeeded), len(failed))

        report_payload = {
            "status": status,
            "run_started_at": started_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "run_finished_at": finished_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "duration_seconds": round((finished_at - started_at).total_seconds(), 3),
            "run_date": effective_run_date.isoformat(),
            "config": resolved_limits.to_dict(),
            "files": {
                "attempted_count": len(files),
                "succeeded_count": len(succeeded),
                "failed_count": len(failed),
                "succeeded": succeeded,
                "failed": failed,
                "details": files,
            },
            "artifact_paths": {
                "table": str(table_path.resolve()) if table_path else None,
                "report": str(report_path.resolve()),
            },
            "exception_summary": run_exception,
        }
        write_json_atomic(report_payload, report_path)
    return report_payload


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    report = run_parse(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        limits=load_limits(args.limits),
        date=_coerce_run_date(args.date),
    )

    print(f"Run status: {report['status']}")
    print(f"Wrote table: {report['artifact_paths']['table']}")
    print(f"Wrote parse report: {report['artifact_paths']['report']}")
    print(
        "File counts: "
        f"succeeded={report['files']['succeeded_count']}, "
        f"failed={report['files']['failed_count']}"
    )
    return 0 if report["status"] != "failed" else 1


if __name__ == "__main__":
    raise SystemExit(main())
