"""
Unit tests for text_normalization module.

Covers noise detection, contact-info detection, line splitting and extractor cleanup.
"""

import pytest
from app.core.text_normalization import (
    clean_extracted_text,
    is_contact_info,
    is_noise_line,
    normalize_lines,
)


class TestNoiseDetection:
    """Lines that are UI chrome, not content."""

    @pytest.mark.parametrize(
        "line",
        [
            "123 connections",
            "500+ connections",
            "1,204 followers",
            "12 views",
            "View profile",
            "Connect",
            "MESSAGE",
            "Edit profile",
            "Home",
            "Recommendations",
            "•",
            " - ",
            "---",
            "***",
            "10:30 AM",
            "9:05pm",
        ],
    )
    def test_noise(self, line):
        assert is_noise_line(line)

    @pytest.mark.parametrize(
        "line",
        [
            "Jane Doe",
            "Python",
            "2020",
            "Connections between teams",
            "Messaging platform engineer",
            "- Led migration",
        ],
    )
    def test_content(self, line):
        assert not is_noise_line(line)


class TestContactInfo:
    @pytest.mark.parametrize(
        "line",
        [
            "jane.doe@example.com",
            "Email: jane@example.org",
            "https://github.com/janedoe",
            "linkedin.com/in/janedoe",
            "www.janedoe.dev",
            "+1 (555) 123-4567",
            "555-123-4567",
        ],
    )
    def test_contact(self, line):
        assert is_contact_info(line)

    @pytest.mark.parametrize("line", ["Jane Doe", "Engineer @ Acme", "2019 - 2021", "Go, Rust"])
    def test_not_contact(self, line):
        assert not is_contact_info(line)


class TestNormalizeLines:
    def test_trims_and_drops_empty_and_noise(self):
        raw = "  Jane Doe  \n\n   \nView profile\n123 connections\nEngineer | Builder\n---\n"
        assert normalize_lines(raw) == ["Jane Doe", "Engineer | Builder"]

    def test_handles_crlf_and_form_feeds(self):
        assert normalize_lines("A line\r\nB line\fC line\rD line") == ["A line", "B line", "C line", "D line"]

    def test_empty(self):
        assert normalize_lines("") == []


class TestCleanExtractedText:
    def test_removes_page_markers_and_form_feeds(self):
        raw = "Jane Doe\r\n\fPage 1 of 2\nEngineer"
        assert clean_extracted_text(raw) == "Jane Doe\nEngineer"

    def test_collapses_inline_whitespace(self):
        assert clean_extracted_text("Skills:\t\tPython    SQL") == "Skills: Python SQL"

    def test_drops_rule_and_page_number_lines(self):
        raw = "Experience\n=====\n____\n3\nSenior Engineer"
        assert clean_extracted_text(raw) == "Experience\nSenior Engineer"

    def test_removes_generated_footer_and_control_chars(self):
        raw = "Jane Doe\x00\nGenerated on 2024-01-01 by Exporter\nAbout"
        assert clean_extracted_text(raw) == "Jane Doe\nAbout"

    def test_keeps_linkedin_word_in_content(self):
        assert clean_extracted_text("LinkedIn Learning instructor") == "LinkedIn Learning instructor"

    def test_empty(self):
        assert clean_extracted_text("") == ""
