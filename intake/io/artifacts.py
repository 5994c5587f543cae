from __future__ import annotations

import json
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

import pandas as pd

from intake.normalize.schema import ADMISSION_FIELDS, FLAG_FIELDS, LIST_FIELDS

EXTRACTION_TABLE_PREFIX = "applications_"
EXTRACTION_COLUMNS = ["source_file", *ADMISSION_FIELDS]
LIST_JOINER = "; "


def _coerce_output_date(run_date: date | str | None) -> date:
    if run_date is None:
        return datetime.now(tz=UTC).date()
    if isinstance(run_date, date):
        return run_date
    return datetime.strptime(run_date, "%Y%m%d").date()


def extraction_table_filename(run_date: date) -> str:
    return f"{EXTRACTION_TABLE_PREFIX}{run_date.strftime('%Y%m%d')}.csv"


def _table_value(field: str, value: Any) -> Any:
    if field in LIST_FIELDS:
        if not isinstance(value, list):
            return None
        return LIST_JOINER.join(str(item) for item in value) or None
    if field in FLAG_FIELDS:
        return bool(value)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def records_to_frame(rows: list[Mapping[str, Any]]) -> pd.DataFrame:
    """One row per source file; ``rows`` carry ``source_file`` plus a partial record."""

    if not rows:
        return pd.DataFrame(columns=EXTRACTION_COLUMNS)

    table_rows = []
    for row in rows:
        table_row: dict[str, Any] = {"source_file": str(row.get("source_file") or "")}
        for field in ADMISSION_FIELDS:
            table_row[field] = _table_value(field, row.get(field))
        table_rows.append(table_row)

    df = pd.DataFrame(table_rows, columns=EXTRACTION_COLUMNS)
    return df.sort_values(by=["source_file"], kind="mergesort").reset_index(drop=True)


def write_csv_atomic(df: pd.DataFrame, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        df.to_csv(temp_path, index=False)
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_json_atomic(payload: dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = output_path.parent / f"{output_path.name}.{uuid4().hex}.tmp"
    try:
        temp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        temp_path.replace(output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()


def write_extraction_table(
    df: pd.DataFrame,
    *,
    output_dir: Path,
    run_date: date | str | None = None,
) -> Path:
    table_date = _coerce_output_date(run_date)
    output_path = output_dir / extraction_table_filename(table_date)
    write_csv_atomic(df[EXTRACTION_COLUMNS], output_path)
    return output_path
