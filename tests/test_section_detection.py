"""
Tests for section header detection and entry-boundary heuristics.
"""

import pytest
from app.core.section_detector import (
    Section,
    detect_section,
    is_education_entry_start,
    is_job_entry_start,
    is_section_header,
)


# ===== SECTION HEADER TESTS =====

@pytest.mark.parametrize(
    "line, expected",
    [
        ("About", Section.ABOUT),
        ("SUMMARY", Section.ABOUT),
        ("Professional Summary", Section.ABOUT),
        ("Experience", Section.EXPERIENCE),
        ("Work Experience:", Section.EXPERIENCE),
        ("Employment History", Section.EXPERIENCE),
        ("Skills", Section.SKILLS),
        ("Core Competencies", Section.SKILLS),
        ("Technologies", Section.SKILLS),
        ("Education", Section.EDUCATION),
        ("Academic Background", Section.EDUCATION),
        ("Certifications", Section.CERTIFICATIONS),
        ("Licenses & Certifications", Section.CERTIFICATIONS),
        ("  credentials  ", Section.CERTIFICATIONS),
    ],
)
def test_header_detection(line, expected):
    assert detect_section(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "Jane Doe",
        "Senior Engineer",
        "Built tooling that improved the developer experience for all teams",
        "Go, Rust, Kubernetes",
        "",
    ],
)
def test_non_header_lines(line):
    assert detect_section(line) is None


def test_header_match_forms():
    assert is_section_header("skills", Section.SKILLS)
    assert is_section_header("skills:", Section.SKILLS)
    assert is_section_header("skills and tools", Section.SKILLS)
    # contains the term and is < 15 chars longer than it
    assert is_section_header("my key skills", Section.SKILLS)


def test_long_line_mentioning_term_is_not_a_header():
    line = "ten years of experience shipping products"
    assert not is_section_header(line, Section.EXPERIENCE)


def test_sections_checked_in_order():
    # "summary of experience" starts with an about term, so ABOUT wins
    assert detect_section("Summary of Experience") == Section.ABOUT


# ===== JOB ENTRY TESTS =====

@pytest.mark.parametrize(
    "line",
    [
        "Senior Engineer",
        "Product Manager at Globex",
        "Acme Solutions",
        "Initech Inc.",
        "Jan 2020 - Present",
        "2018 - 2020",
        "03/2019",
        "Joined in 2015",
    ],
)
def test_job_entry_start(line):
    assert is_job_entry_start(line)


@pytest.mark.parametrize(
    "line",
    [
        "Led migration.",
        "Reduced cloud costs by 30%",
        "abc",
        "Engineer " + "x" * 300,
    ],
)
def test_not_job_entry_start(line):
    assert not is_job_entry_start(line)


# ===== EDUCATION ENTRY TESTS =====

@pytest.mark.parametrize(
    "line",
    [
        "Bachelor of Science in Physics",
        "MBA, Finance",
        "Stanford University",
        "Lincoln High School",
        "Class of 2012",
        "GPA 3.8",
        "Dean's List",
        "Sep 2014",
    ],
)
def test_education_entry_start(line):
    assert is_education_entry_start(line)


def test_not_education_entry_start():
    assert not is_education_entry_start("Thesis on consensus protocols")
    assert not is_education_entry_start("PhD")  # too short


def test_header_length_guard_boundary():
    """A line containing the term is a header up to 14 extra characters, not at 15."""
    within = "Relevant experience list"
    over = "Relevant experience lists"
    assert len(within) == len("experience") + 14
    assert len(over) == len("experience") + 15

    assert is_section_header(within.lower(), Section.EXPERIENCE)
    assert detect_section(within) == Section.EXPERIENCE
    assert not is_section_header(over.lower(), Section.EXPERIENCE)
    assert detect_section(over) is None
