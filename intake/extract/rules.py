from __future__ import annotations

import re

# Label patterns are listed most specific first. Values stop at the end of the line;
# the separator between a label and its value may span a line break.

_I = re.IGNORECASE

_EMAIL = r"([a-zA-Z0-9._%+-]{1,64}@[a-zA-Z0-9.-]{1,255}\.[a-zA-Z]{2,})"
_PHONE = r"([\d \t()+\-]+)"
_DATE = r"([\d/.\-]+)"
_WORDS = r"([A-Za-z \t]+)"
_WORDS_AND_DIGITS = r"([A-Za-z \t\d]+)"
_ADDRESS = r"([A-Za-z0-9 \t,.\-]+)"
_NAME_LIST = r"([A-Za-z \t,;]+)"

FIRST_NAME_PATTERNS = [
    re.compile(r"first\s*name[:\s]+([A-Za-z]+)", _I),
    re.compile(r"first[:\s]+([A-Za-z]+)", _I),
    re.compile(r"name[:\s]+([A-Za-z]+)", _I),
]

LAST_NAME_PATTERNS = [
    re.compile(r"last\s*name[:\s]+([A-Za-z]+)", _I),
    re.compile(r"surname[:\s]+([A-Za-z]+)", _I),
    re.compile(r"family\s*name[:\s]+([A-Za-z]+)", _I),
]

EMAIL_PATTERNS = [
    re.compile(r"email[:\s]+" + _EMAIL, _I),
    re.compile(r"e-mail[:\s]+" + _EMAIL, _I),
    re.compile(_EMAIL),
]

PHONE_PATTERNS = [
    re.compile(r"phone[:\s]+" + _PHONE, _I),
    re.compile(r"telephone[:\s]+" + _PHONE, _I),
    re.compile(r"mobile[:\s]+" + _PHONE, _I),
    re.compile(r"contact[:\s]+" + _PHONE, _I),
]

DATE_OF_BIRTH_PATTERNS = [
    re.compile(r"date\s*of\s*birth[:\s]+" + _DATE, _I),
    re.compile(r"dob[:\s]+" + _DATE, _I),
    re.compile(r"birth\s*date[:\s]+" + _DATE, _I),
]

MAJOR_PATTERNS = [
    re.compile(r"major[:\s]+" + _WORDS, _I),
    re.compile(r"field\s*of\s*study[:\s]+" + _WORDS, _I),
    re.compile(r"program[:\s]+" + _WORDS, _I),
]

ADMISSION_TERM_PATTERNS = [
    re.compile(r"admission\s*term[:\s]+" + _WORDS_AND_DIGITS, _I),
    re.compile(r"term[:\s]+" + _WORDS_AND_DIGITS, _I),
    re.compile(r"semester[:\s]+" + _WORDS_AND_DIGITS, _I),
]

# Group 1 is the singular/plural marker, group 2 the list body.
UNIVERSITY_LIST_PATTERNS = [
    re.compile(r"universit(y|ies)[:\s]+" + _NAME_LIST, _I),
    re.compile(r"school(s)?[:\s]+" + _NAME_LIST, _I),
    re.compile(r"institution(s)?[:\s]+" + _NAME_LIST, _I),
]
MAX_UNIVERSITY_NAME_LENGTH = 100

HOMESTAY_ADDRESS_PATTERNS = [
    re.compile(r"homestay(?:\s*address)?[:\s]+" + _ADDRESS, _I),
    re.compile(r"(?<!mail\s)address[:\s]+" + _ADDRESS, _I),
]

BOSTON_ARRIVAL_PATTERNS = [
    re.compile(r"boston\s*arrival(?:\s*date)?[:\s]+" + _DATE, _I),
    re.compile(r"arrival\s*date[:\s]+" + _DATE, _I),
]

EXPECTED_GRADUATION_PATTERNS = [
    re.compile(r"expected\s*graduation(?:\s*date)?[:\s]+" + _DATE, _I),
    re.compile(r"graduation\s*date[:\s]+" + _DATE, _I),
]

# Presence-only flags: a mention anywhere in the document sets the flag.
DOCUMENT_FLAG_KEYWORDS = {
    "passportCollected": re.compile(r"passport", _I),
    "applicationFormCollected": re.compile(r"application\s*form", _I),
    "highschoolTranscriptCollected": re.compile(r"high\s*school\s*transcript", _I),
    "collegeTranscriptCollected": re.compile(r"college\s*transcript", _I),
    "stage2Services": re.compile(r"stage\s*2", _I),
}

SHORELIGHT_KEYWORD = re.compile(r"shorelight", _I)

# Canonical output order of the partner list.
PARTNER_UNIVERSITIES = [
    ("Stony Brook", re.compile(r"stony\s*brook", _I)),
    ("UMASS Boston", re.compile(r"umass\s*boston", _I)),
    ("University of Illinois Chicago", re.compile(r"university\s*of\s*illinois\s*chicago", _I)),
]
