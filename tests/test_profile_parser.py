"""End-to-end tests for parse_profile_text: scenarios and record-level properties."""

import pytest
from pydantic import ValidationError

from app.core.profile_parser import (
    MAX_CERTIFICATIONS,
    MAX_EDUCATION,
    MAX_EXPERIENCE,
    MAX_SKILLS,
    ProfileAccumulator,
    clean_profile,
    parse_profile_text,
)
from app.core.schemas import ProfileRecord


FULL_PROFILE = (
    "Jane A. Doe\n"
    "Senior Software Engineer at Acme Corp\n"
    "About\n"
    "Builds scalable systems.\n"
    "Experience\n"
    "Senior Engineer\n"
    "Acme Corp | 2020 - Present\n"
    "Led migration.\n"
    "Skills\n"
    "Go, Rust, Kubernetes"
)


def test_full_profile_scenario():
    profile = parse_profile_text(FULL_PROFILE)

    assert profile.name == "Jane A. Doe"
    assert profile.headline == "Senior Software Engineer at Acme Corp"
    assert profile.about == "Builds scalable systems."
    assert list(profile.experience) == ["Senior Engineer\nAcme Corp | 2020 - Present\nLed migration."]
    assert list(profile.skills) == ["Go", "Rust", "Kubernetes"]
    assert list(profile.education) == []
    assert list(profile.certifications) == []


def test_noise_only_input_yields_empty_record():
    profile = parse_profile_text("View profile\n123 connections\n---")

    assert profile == ProfileRecord()
    assert profile.name == ""
    assert profile.headline == ""
    assert profile.about == ""
    assert list(profile.experience) == []
    assert list(profile.skills) == []


@pytest.mark.parametrize("raw", [None, "", "   \n\n\t", "\x00\x0c\x0c", "•\n·\n-"])
def test_degenerate_input_never_raises(raw):
    profile = parse_profile_text(raw)
    assert profile == ProfileRecord()


def test_non_string_input_is_coerced():
    profile = parse_profile_text(12345)
    assert isinstance(profile, ProfileRecord)


def test_all_fields_always_present():
    data = parse_profile_text("nothing useful").model_dump()
    assert set(data) == {"name", "headline", "about", "experience", "skills", "education", "certifications"}


def test_headline_never_set_before_name():
    """A headline-looking line before any name must not become the headline."""
    profile = parse_profile_text("Senior Software Engineer at Acme Corp\nJane Doe")

    assert profile.name == "Jane Doe"
    assert profile.headline == ""


def test_headline_detected_after_name():
    profile = parse_profile_text("Jane Doe\nProduct Manager | Fintech")
    assert profile.headline == "Product Manager | Fintech"


def test_contact_info_is_skipped_before_name_and_headline():
    profile = parse_profile_text(
        "jane.doe@example.com\n"
        "Jane Doe\n"
        "+1 (555) 123-4567\n"
        "https://www.linkedin.com/in/janedoe\n"
        "Data Scientist | Machine Learning"
    )

    assert profile.name == "Jane Doe"
    assert profile.headline == "Data Scientist | Machine Learning"
    assert "@" not in profile.about


def test_about_fallback_from_unsectioned_line():
    profile = parse_profile_text(
        "Jane Doe\n"
        "Passionate builder of reliable distributed systems\n"
        "Skills\n"
        "Python"
    )

    assert profile.about == "Passionate builder of reliable distributed systems"
    assert list(profile.skills) == ["Python"]


def test_about_is_first_write_wins():
    profile = parse_profile_text(
        "Jane Doe\n"
        "Passionate builder of reliable distributed systems\n"
        "About\n"
        "A second summary that should not replace the first one"
    )

    assert profile.about == "Passionate builder of reliable distributed systems"


def test_explicit_about_section_joins_lines_with_spaces():
    profile = parse_profile_text(
        "Jane Doe\n"
        "Summary\n"
        "Ten years building payment systems\n"
        "across three continents."
    )

    assert profile.about == "Ten years building payment systems across three continents."


def test_short_unsectioned_lines_are_dropped():
    profile = parse_profile_text("Jane Doe\nRemote\nBerlin")
    assert profile.about == ""
    assert profile.headline == ""


def test_certifications_one_per_line():
    profile = parse_profile_text(
        "Jane Doe\n"
        "Cloud Engineer | DevOps\n"
        "Certifications\n"
        "AWS Solutions Architect\n"
        "Certified Kubernetes Administrator\n"
        "AWS Solutions Architect"
    )

    assert list(profile.certifications) == ["AWS Solutions Architect", "Certified Kubernetes Administrator"]


def test_experience_order_is_preserved():
    profile = parse_profile_text(
        "Jane Doe\n"
        "Software Engineer at Acme\n"
        "Experience\n"
        "Staff Engineer\n"
        "Globex 2019 - 2021\n"
        "Built the billing platform\n"
        "Software Engineer\n"
        "Initech 2016 - 2019\n"
        "Maintained reporting tools"
    )

    assert list(profile.experience) == [
        "Staff Engineer\nGlobex 2019 - 2021\nBuilt the billing platform",
        "Software Engineer\nInitech 2016 - 2019\nMaintained reporting tools",
    ]


def test_experience_duplicates_removed():
    profile = parse_profile_text(
        "Jane Doe\n"
        "Software Engineer at Acme\n"
        "Experience\n"
        "Staff Engineer\n"
        "Globex 2019 - 2021\n"
        "Staff Engineer\n"
        "Globex 2019 - 2021"
    )

    assert list(profile.experience) == ["Staff Engineer\nGlobex 2019 - 2021"]


def test_caps_hold_for_oversized_input():
    lines = ["Jane Doe", "Software Engineer at Acme", "Experience"]
    lines += [f"Engineer at Company {i} {1950 + i}" for i in range(40)]
    lines += ["Skills", ", ".join(f"Tool{i}" for i in range(150))]
    lines += ["Education"] + [f"Bachelor of Arts {1950 + i}" for i in range(20)]
    lines += ["Certifications"] + [f"Scrum Master {i}" for i in range(40)]

    profile = parse_profile_text("\n".join(lines))

    assert len(profile.experience) == MAX_EXPERIENCE == 30
    assert len(profile.skills) == MAX_SKILLS == 100
    assert len(profile.education) == MAX_EDUCATION == 15
    assert len(profile.certifications) == MAX_CERTIFICATIONS == 30
    # First occurrences survive the cap
    assert profile.experience[0] == "Engineer at Company 0 1950"
    assert profile.skills[0] == "Tool0"


def test_parse_is_deterministic():
    first = parse_profile_text(FULL_PROFILE)
    second = parse_profile_text(FULL_PROFILE)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_record_is_frozen():
    profile = parse_profile_text(FULL_PROFILE)
    with pytest.raises(ValidationError):
        profile.name = "Someone Else"
    with pytest.raises(AttributeError):
        profile.skills.append("Injected")
    assert list(parse_profile_text(FULL_PROFILE).skills) == ["Go", "Rust", "Kubernetes"]


def test_clean_profile_is_idempotent():
    messy = ProfileRecord(
        name="  Jane Doe ",
        headline=" Engineer | Builder ",
        about=" about text ",
        experience=["Entry one", "Entry one", "abc", "Entry two"],
        skills=["Python", "x", "Python", "Go"],
        education=["BSc Physics", "MSc", "BSc Physics"],
        certifications=["PMP", "", "PMP", "CKA"],
    )

    once = clean_profile(messy)
    twice = clean_profile(once)

    assert once == twice
    assert once.name == "Jane Doe"
    assert list(once.experience) == ["Entry one", "Entry two"]
    assert list(once.skills) == ["Python", "Go"]
    assert list(once.education) == ["BSc Physics"]
    assert list(once.certifications) == ["PMP", "CKA"]


def test_accumulator_finishes_once():
    acc = ProfileAccumulator()
    acc.consume("Jane Doe")
    acc.finish()

    with pytest.raises(RuntimeError):
        acc.finish()
    with pytest.raises(RuntimeError):
        acc.consume("More text")


def test_crlf_and_form_feed_input():
    profile = parse_profile_text("Jane Doe\r\nSkills\r\nPython, SQL\fEducation\fBachelor of Science 2015")

    assert profile.name == "Jane Doe"
    assert list(profile.skills) == ["Python", "SQL"]
    assert list(profile.education) == ["Bachelor of Science 2015"]
