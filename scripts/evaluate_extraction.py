from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from intake.eval.review_outcomes import compare_with_review, summarize_review_outcomes
from intake.ingest.base import UploadedFile
from intake.ingest.handler import parse_application_upload
from intake.ingest.limits import IntakeLimits, load_limits
from intake.io.artifacts import write_json_atomic

logger = logging.getLogger("evaluate_extraction")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compare pre-filled records with the records reviewers saved for the same PDFs."
    )
    parser.add_argument("--input-dir", type=Path, default=ROOT_DIR / "data" / "applications")
    parser.add_argument(
        "--reviewed-dir",
        type=Path,
        default=ROOT_DIR / "data" / "reviewed",
        help="Directory of reviewed records saved as <pdf stem>.json.",
    )
    parser.add_argument("--output-dir", type=Path, default=ROOT_DIR / "reports" / "extraction_eval")
    parser.add_argument("--limits", type=Path, default=None)
    return parser.parse_args()


def _load_reviewed(path: Path) -> dict[str, Any]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Reviewed record '{path}' must contain a JSON object.")
    return payload


def pair_documents(input_dir: Path, reviewed_dir: Path) -> list[tuple[Path, Path]]:
    pairs: list[tuple[Path, Path]] = []
    for pdf_path in sorted(input_dir.glob("*.pdf")):
        reviewed_path = reviewed_dir / f"{pdf_path.stem}.json"
        if reviewed_path.exists():
            pairs.append((pdf_path, reviewed_path))
        else:
            logger.warning("No reviewed record for %s; skipping.", pdf_path.name)
    return pairs


def evaluate_documents(
    pairs: list[tuple[Path, Path]],
    *,
    limits: IntakeLimits | None = None,
) -> dict[str, Any]:
    comparisons: list[dict[str, str]] = []
    per_document: list[dict[str, Any]] = []
    for pdf_path, reviewed_path in pairs:
        upload = UploadedFile(
            filename=pdf_path.name,
            content_type="application/pdf",
            payload=pdf_path.read_bytes(),
        )
        outcome = parse_application_upload(upload, limits=limits)
        extracted = outcome.payload if outcome.ok else {}
        comparison = compare_with_review(extracted, _load_reviewed(reviewed_path))
        comparisons.append(comparison)
        per_document.append(
            {
                "file": pdf_path.name,
                "status_code": outcome.status_code,
                "outcomes": comparison,
            }
        )

    summary = summarize_review_outcomes(comparisons)
    summary["documents_detail"] = per_document
    return summary


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pairs = pair_documents(args.input_dir, args.reviewed_dir)
    if not pairs:
        logger.error("No PDF/reviewed-record pairs found in %s and %s.", args.input_dir, args.reviewed_dir)
        return 1

    summary = evaluate_documents(pairs, limits=load_limits(args.limits))
    stamp = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%SZ")
    report_path = args.output_dir / f"extraction_eval_{stamp}.json"
    write_json_atomic(summary, report_path)

    print(f"Documents evaluated: {summary['documents']}")
    print(f"Pre-fill precision: {summary['prefill_precision']:.3f}")
    print(f"Pre-fill recall: {summary['prefill_recall']:.3f}")
    print(f"Wrote report: {report_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
