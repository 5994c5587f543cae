from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import (
    checklist_summary,
    csv_to_list,
    list_to_csv,
    outcomes_frame,
    upload_fingerprint,
)
from intake.eval.review_outcomes import compare_with_review
from intake.ingest.base import UploadedFile
from intake.ingest.handler import parse_application_upload
from intake.ingest.limits import load_limits
from intake.normalize.schema import (
    ADMISSION_FIELDS,
    FLAG_FIELDS,
    LIST_FIELDS,
    build_submission,
    default_student_form,
    prefill_form,
    validate_student_form,
)

LIMITS_PATH = ROOT_DIR / "config" / "intake_limits.json"

_WIDGET_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "phone": "Phone",
    "dateOfBirth": "Date of birth (YYYY-MM-DD)",
    "desiredAdmissionTerm": "Desired admission term",
    "major": "Major",
    "homestayAddress": "Homestay address",
    "bostonArrivalDate": "Boston arrival date (YYYY-MM-DD)",
    "expectedGraduationDate": "Expected graduation date (YYYY-MM-DD)",
    "desiredUniversities": "Desired universities (comma-separated)",
    "shorelightUniversities": "Shorelight universities (comma-separated)",
    "passportCollected": "Passport collected",
    "applicationFormCollected": "Application form collected",
    "highschoolTranscriptCollected": "High school transcript collected",
    "collegeTranscriptCollected": "College transcript collected",
    "shorelightApplication": "Shorelight application",
    "stage2Services": "Stage 2 services",
}


def _widget_key(field: str) -> str:
    return f"form_{field}"


def _ensure_session_state() -> None:
    if "form" not in st.session_state:
        st.session_state.form = default_student_form()
    if "extracted" not in st.session_state:
        st.session_state.extracted = {}
    if "parse_error" not in st.session_state:
        st.session_state.parse_error = None
    if "last_upload_key" not in st.session_state:
        st.session_state.last_upload_key = None
    _apply_form_to_widgets(st.session_state.form, overwrite=False)


def _apply_form_to_widgets(form: dict[str, Any], *, overwrite: bool = True) -> None:
    for field in ADMISSION_FIELDS:
        key = _widget_key(field)
        if not overwrite and key in st.session_state:
            continue
        value = form.get(field)
        if field in LIST_FIELDS:
            st.session_state[key] = list_to_csv(value)
        elif field in FLAG_FIELDS:
            st.session_state[key] = bool(value)
        else:
            st.session_state[key] = str(value or "")


def _form_from_widgets() -> dict[str, Any]:
    form: dict[str, Any] = {}
    for field in ADMISSION_FIELDS:
        value = st.session_state.get(_widget_key(field))
        if field in LIST_FIELDS:
            form[field] = csv_to_list(value)
        elif field in FLAG_FIELDS:
            form[field] = bool(value)
        else:
            form[field] = str(value or "")
    return form


def _handle_upload(uploaded: Any) -> None:
    upload = UploadedFile(
        filename=uploaded.name,
        content_type=uploaded.type or "",
        payload=uploaded.getvalue(),
    )
    try:
        limits = load_limits(LIMITS_PATH)
    except ValueError as exc:
        st.session_state.parse_error = f"Invalid intake limits configuration: {exc}"
        return

    outcome = parse_application_upload(upload, limits=limits)
    st.session_state.last_upload_key = upload_fingerprint(upload.filename, upload.payload)
    if not outcome.ok:
        st.session_state.parse_error = outcome.payload.get("error")
        st.session_state.extracted = {}
        return

    st.session_state.parse_error = None
    st.session_state.extracted = outcome.payload
    st.session_state.form = prefill_form(_form_from_widgets(), outcome.payload)
    _apply_form_to_widgets(st.session_state.form)


def _render_form_fields() -> None:
    st.subheader("Personal Information")
    for field in ("firstName", "lastName", "email", "phone", "dateOfBirth"):
        st.text_input(_WIDGET_LABELS[field], key=_widget_key(field))

    st.subheader("Admission Process")
    for field in (
        "passportCollected",
        "applicationFormCollected",
        "highschoolTranscriptCollected",
        "collegeTranscriptCollected",
    ):
        st.checkbox(_WIDGET_LABELS[field], key=_widget_key(field))
    for field in ("desiredAdmissionTerm", "desiredUniversities", "major", "homestayAddress", "bostonArrivalDate"):
        st.text_input(_WIDGET_LABELS[field], key=_widget_key(field))
    st.checkbox(_WIDGET_LABELS["shorelightApplication"], key=_widget_key("shorelightApplication"))
    st.text_input(_WIDGET_LABELS["shorelightUniversities"], key=_widget_key("shorelightUniversities"))

    st.subheader("After Graduation")
    st.checkbox(_WIDGET_LABELS["stage2Services"], key=_widget_key("stage2Services"))
    st.text_input(_WIDGET_LABELS["expectedGraduationDate"], key=_widget_key("expectedGraduationDate"))


def main() -> None:
    st.set_page_config(page_title="Admissions Intake", layout="wide")
    st.title("Add New Student")
    st.caption("Upload application PDF -> review pre-filled fields -> export submission")

    _ensure_session_state()

    with st.sidebar:
        st.header("Application Form (PDF)")
        uploaded = st.file_uploader("Add an application form", type=["pdf"])
        if uploaded is not None and (
            upload_fingerprint(uploaded.name, uploaded.getvalue()) != st.session_state.last_upload_key
        ):
            with st.spinner("Processing PDF..."):
                _handle_upload(uploaded)
            if st.session_state.parse_error is None:
                st.success("Application form parsed successfully! Please review and complete the form.")
        if st.session_state.parse_error:
            st.error(st.session_state.parse_error)

        if st.button("Reset form", use_container_width=True):
            st.session_state.form = default_student_form()
            st.session_state.extracted = {}
            st.session_state.parse_error = None
            _apply_form_to_widgets(st.session_state.form)
            st.rerun()

    form_col, review_col = st.columns([2, 1])
    with form_col:
        _render_form_fields()

    form = _form_from_widgets()
    st.session_state.form = form
    errors = validate_student_form(form)

    with review_col:
        st.subheader("Document Checklist")
        for line in checklist_summary(form):
            st.write(line)

        if st.session_state.extracted:
            st.subheader("Review Outcomes")
            comparison = compare_with_review(st.session_state.extracted, form)
            st.dataframe(outcomes_frame(comparison), use_container_width=True, hide_index=True)
            with st.expander("Extracted record"):
                st.json(st.session_state.extracted)

        st.subheader("Submission")
        if errors:
            st.warning("Please fix the following issues:")
            for field, message in errors.items():
                st.write(f"- {field}: {message}")
        else:
            submission = build_submission(form)
            st.download_button(
                "Download student record (JSON)",
                data=json.dumps(submission, indent=2, sort_keys=True),
                file_name="student_record.json",
                mime="application/json",
                use_container_width=True,
            )


if __name__ == "__main__":
    main()
