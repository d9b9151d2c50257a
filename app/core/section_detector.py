"""
Section header detection and entry-boundary heuristics.

Rule-based classification only: a fixed vocabulary per section decides header lines,
and keyword/date patterns decide where one experience or education entry ends and the
next begins.
"""

import re
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Section(str, Enum):
    NONE = "none"
    ABOUT = "about"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    EDUCATION = "education"
    CERTIFICATIONS = "certifications"


# ===== SECTION HEADER VOCABULARY =====
# Checked in this order; the first section whose vocabulary matches wins.

SECTION_HEADERS: Dict[Section, Tuple[str, ...]] = {
    Section.ABOUT: ("about", "summary", "profile summary", "professional summary", "overview"),
    Section.EXPERIENCE: (
        "experience",
        "work experience",
        "professional experience",
        "work history",
        "employment",
        "career history",
    ),
    Section.SKILLS: (
        "skills",
        "technical skills",
        "core competencies",
        "expertise",
        "proficiencies",
        "technologies",
    ),
    Section.EDUCATION: ("education", "academic background", "academic", "university", "college", "school"),
    Section.CERTIFICATIONS: (
        "certification",
        "certifications",
        "certificate",
        "certificates",
        "license",
        "licenses",
        "credentials",
    ),
}

# A line that merely contains a term is a header only if len(line) < len(term) + HEADER_SLACK.
HEADER_SLACK = 15


def is_section_header(lower_line: str, section: Section) -> bool:
    """
    Check a lower-cased line against one section's vocabulary.

    Matches "term", "term:", "term ..." or a short line containing the term
    (len(line) < len(term) + 15). The length guard keeps sentences that mention
    "experience" in passing from switching sections.
    """
    for term in SECTION_HEADERS.get(section, ()):
        if lower_line == term or lower_line == term + ":":
            return True
        if lower_line.startswith(term + " "):
            return True
        if term in lower_line and len(lower_line) < len(term) + HEADER_SLACK:
            return True
    return False


def detect_section(line: str) -> Optional[Section]:
    """Return the section a header line opens, or None for content lines."""
    lower_line = line.strip().lower()
    if not lower_line:
        return None
    for section in SECTION_HEADERS:
        if is_section_header(lower_line, section):
            return section
    return None


# ===== EXPERIENCE ENTRY PATTERNS =====

JOB_TITLE_PATTERNS = [
    re.compile(
        r"^(senior|junior|lead|principal|chief|head of|vp|vice president|director|manager|engineer"
        r"|developer|analyst|specialist|consultant|coordinator|assistant|associate|intern)",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(manager|engineer|developer|analyst|specialist|consultant|director|coordinator|assistant"
        r"|associate|lead|senior|junior|intern|owner|partner|president)\b",
        re.IGNORECASE,
    ),
]

COMPANY_PATTERNS = [
    re.compile(
        r"(inc\.|llc|corp\.|company|ltd\.|organization|university|college|institute|group|solutions"
        r"|systems|technologies|services|consulting|agency|firm)",
        re.IGNORECASE,
    ),
]

EXPERIENCE_DATE_PATTERNS = [
    re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+\d{4}", re.IGNORECASE),
    re.compile(r"\d{4}\s*[-–]\s*(\d{4}|present|current)", re.IGNORECASE),
    re.compile(r"\d{1,2}/\d{4}"),
    re.compile(r"\b\d{4}\b"),
]

# ===== EDUCATION ENTRY PATTERNS =====

DEGREE_PATTERNS = [
    re.compile(
        r"(bachelor|master|phd|doctorate|associate|certificate|diploma|degree|b\.?s\.?|b\.?a\.?"
        r"|m\.?s\.?|m\.?a\.?|m\.?b\.?a\.?|ph\.?d\.?|high school|hs)",
        re.IGNORECASE,
    ),
]

INSTITUTION_PATTERNS = [
    re.compile(r"(university|college|institute|school|academy|tech|polytechnic)", re.IGNORECASE),
]

EDUCATION_DATE_PATTERNS = [
    re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)\s+\d{4}", re.IGNORECASE),
    re.compile(r"\d{4}\s*[-–]\s*\d{4}"),
    re.compile(r"class of \d{4}", re.IGNORECASE),
    re.compile(r"\b\d{4}\b"),
]

ACADEMIC_PATTERNS = [
    re.compile(
        r"(major|minor|gpa|honors|magna cum laude|summa cum laude|dean's list|graduated|graduation)",
        re.IGNORECASE,
    ),
]

MIN_ENTRY_LINE = 3
MAX_ENTRY_LINE = 300


def _any_match(patterns: List[re.Pattern], text: str) -> bool:
    return any(p.search(text) for p in patterns)


def _entry_length_ok(line: str) -> bool:
    return MIN_ENTRY_LINE < len(line) < MAX_ENTRY_LINE


def has_experience_date(line: str) -> bool:
    return _any_match(EXPERIENCE_DATE_PATTERNS, line)


def is_job_entry_start(line: str) -> bool:
    """
    Does this line look like the first line of a job entry?

    Any one signal is enough: a role/seniority word, a company designator
    (Inc., LLC, Group, Solutions, ...) or a date (month + year, year range, MM/YYYY,
    bare year).
    """
    has_signal = (
        _any_match(JOB_TITLE_PATTERNS, line)
        or _any_match(COMPANY_PATTERNS, line)
        or has_experience_date(line)
    )
    return has_signal and _entry_length_ok(line)


def is_education_entry_start(line: str) -> bool:
    """Degree, institution, date or academic-achievement keyword, length 4-299."""
    has_signal = (
        _any_match(DEGREE_PATTERNS, line)
        or _any_match(INSTITUTION_PATTERNS, line)
        or _any_match(ACADEMIC_PATTERNS, line)
        or _any_match(EDUCATION_DATE_PATTERNS, line)
    )
    return has_signal and _entry_length_ok(line)
