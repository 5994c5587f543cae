from __future__ import annotations

import re

from intake.extract import LabelRule, extract_array, extract_field, run_chain
from intake.extract import rules


def test_specific_first_name_label_wins_over_generic_name_label() -> None:
    text = "Name: Someone\nFirst Name: Jane\nLast Name: Doe"

    assert extract_field(text, rules.FIRST_NAME_PATTERNS) == "Jane"


def test_generic_name_label_is_used_when_specific_label_is_missing() -> None:
    text = "Applicant details\nFull Name: Maria Lopez"

    assert extract_field(text, rules.FIRST_NAME_PATTERNS) == "Maria"


def test_last_name_falls_back_to_surname_and_family_name() -> None:
    assert extract_field("Surname: Nakamura", rules.LAST_NAME_PATTERNS) == "Nakamura"
    assert extract_field("Family Name: Okafor", rules.LAST_NAME_PATTERNS) == "Okafor"


def test_label_matching_is_case_insensitive() -> None:
    assert extract_field("FIRST NAME: jane", rules.FIRST_NAME_PATTERNS) == "jane"


def test_email_prefers_labelled_address_then_any_address() -> None:
    labelled = "Contact me at other@example.org\nEmail: jane.doe@example.com"
    unlabelled = "Reach the applicant via jane_doe+apps@mail.example.co.uk today"

    assert extract_field(labelled, rules.EMAIL_PATTERNS) == "jane.doe@example.com"
    assert extract_field(unlabelled, rules.EMAIL_PATTERNS) == "jane_doe+apps@mail.example.co.uk"


def test_phone_keeps_digits_and_separators_and_trims() -> None:
    text = "Phone: +1 (617) 555-0100   \nEmail: jane@example.com"

    assert extract_field(text, rules.PHONE_PATTERNS) == "+1 (617) 555-0100"


def test_blank_capture_falls_through_to_next_label() -> None:
    text = "Phone: see mobile\nMobile: 617-555-0199"

    assert extract_field(text, rules.PHONE_PATTERNS) == "617-555-0199"


def test_free_text_values_stop_at_end_of_line() -> None:
    text = "Major: Computer Science\nDesired Admission Term: Fall 2024\n"

    assert extract_field(text, rules.MAJOR_PATTERNS) == "Computer Science"
    assert extract_field(text, rules.ADMISSION_TERM_PATTERNS) == "Fall 2024"


def test_homestay_address_ignores_email_address_label() -> None:
    text = "Email Address: jane@example.com\nAddress: 12 Beacon St, Boston"

    assert extract_field(text, rules.HOMESTAY_ADDRESS_PATTERNS) == "12 Beacon St, Boston"


def test_homestay_label_may_include_address_word() -> None:
    text = "Homestay Address: 12 Beacon St, Boston"

    assert extract_field(text, rules.HOMESTAY_ADDRESS_PATTERNS) == "12 Beacon St, Boston"


def test_missing_field_returns_none() -> None:
    assert extract_field("Nothing to see here.", rules.LAST_NAME_PATTERNS) is None
    assert extract_field("", rules.EMAIL_PATTERNS) is None


def test_extract_array_splits_trims_and_drops_empty_items() -> None:
    pattern = re.compile(r"languages[:\s]+([A-Za-z ,;]+)", re.IGNORECASE)

    assert extract_array("Languages: English, ; Korean ,,Spanish", pattern) == [
        "English",
        "Korean",
        "Spanish",
    ]
    assert extract_array("No list here", pattern) == []


def test_run_chain_stops_at_first_rule_producing_a_value() -> None:
    calls: list[str] = []

    def _take(label: str):
        def _extract(match: re.Match[str]) -> str | None:
            calls.append(label)
            return None if label == "first" else match.group(1)

        return _extract

    chain = [
        LabelRule(re.compile(r"alpha (\w+)"), _take("first")),
        LabelRule(re.compile(r"beta (\w+)"), _take("second")),
        LabelRule(re.compile(r"gamma (\w+)"), _take("third")),
    ]

    assert run_chain("alpha one beta two gamma three", chain) == "two"
    assert calls == ["first", "second"]
