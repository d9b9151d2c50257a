"""
Line-level normalization for raw profile text.

Text arrives from PDF extraction, OCR or a scraped web page and is full of chrome:
connection counters, navigation labels, bullet-only lines, timestamps. Two levels:
- clean_extracted_text(): blob-level cleanup of extraction artifacts (used by the collaborators)
- normalize_lines(): the parser's own line splitter + noise filter, safe on uncleaned input
"""

import re
from typing import List


# ============================================================================
# Noise detection
# ============================================================================

NOISE_PATTERNS = [
    re.compile(r"^[\d,]+\+?\s*(connection|follower|view|like)s?\s*$", re.IGNORECASE),
    re.compile(r"^(linkedin|view profile|connect|message|edit profile)$", re.IGNORECASE),
    re.compile(r"^(home|posts|activity|recommendations)$", re.IGNORECASE),
    re.compile(r"^\s*[•\-·]\s*$"),
    re.compile(r"^[^\w\s]*$"),  # pure symbols
    re.compile(r"^\d{1,2}:\d{2}\s*(am|pm)?$", re.IGNORECASE),
]

SEPARATOR_ONLY_RE = re.compile(r"^[\s\-•·]+$")


def is_noise_line(line: str) -> bool:
    """
    True for lines that carry no profile content.

    Pure function of the text: counters ("123 connections"), UI labels ("View profile",
    "Message"), bullet/dash/symbol-only lines and bare clock times ("10:30 AM").
    """
    if len(line) < 1:
        return True
    if SEPARATOR_ONLY_RE.match(line):
        return True
    return any(p.match(line) for p in NOISE_PATTERNS)


# ============================================================================
# Contact info
# ============================================================================

PHONE_LINE_RE = re.compile(r"^[\+]?[\d\s\-\(\)]{10,}$")
US_PHONE_RE = re.compile(r"^\d{3}-\d{3}-\d{4}$")


def is_contact_info(line: str) -> bool:
    """Email-ish (@ and .), URL or phone-number lines. Always skipped by the parser."""
    if "@" in line and "." in line:
        return True
    lower = line.lower()
    if "linkedin.com" in lower or "http" in lower or "www." in lower:
        return True
    if US_PHONE_RE.match(line):
        return True
    # Digit count keeps year ranges like "2019 - 2021" out
    return bool(PHONE_LINE_RE.match(line)) and sum(ch.isdigit() for ch in line) >= 10


# ============================================================================
# Line splitting
# ============================================================================

def normalize_lines(raw_text: str) -> List[str]:
    """
    Split a raw blob into trimmed, non-empty, non-noise lines in document order.

    `str.splitlines()` also breaks on form feeds and other separators that PDF text
    layers leave behind, so uncleaned extractor output is still split sensibly.
    """
    if not raw_text:
        return []
    out: List[str] = []
    for ln in raw_text.splitlines():
        t = ln.strip()
        if t and not is_noise_line(t):
            out.append(t)
    return out


# ============================================================================
# Extraction artifact cleanup
# ============================================================================

PAGE_MARKER_RE = re.compile(r"Page \d+ of \d+", re.IGNORECASE)
GENERATED_ON_RE = re.compile(r"Generated on .*", re.IGNORECASE)
RULE_LINE_RE = re.compile(r"^[\s\-_=]+$")
DIGITS_ONLY_RE = re.compile(r"^\d+$")


def clean_extracted_text(text: str) -> str:
    """
    Clean raw extractor output before it reaches the parser.

    - CRLF/CR and form feeds become LF, NUL is removed, NBSP becomes a space
    - runs of spaces/tabs collapse, 3+ newlines collapse to a single blank line
    - "Page 2 of 3" and "Generated on ..." footers are removed
    - rule lines (----, ====) and page-number lines are dropped

    Examples:
        "Jane Doe\\r\\n\\fPage 1 of 2\\nEngineer" -> "Jane Doe\\nEngineer"
        "Skills:\\t\\tPython" -> "Skills: Python"
    """
    if not text:
        return ""

    cleaned = (
        text.replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\f", "\n")
        .replace("\u0000", "")
        .replace("\u00a0", " ")
    )
    cleaned = re.sub(r"[ \t]{2,}", " ", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    cleaned = PAGE_MARKER_RE.sub("", cleaned)
    cleaned = GENERATED_ON_RE.sub("", cleaned)

    lines = []
    for ln in cleaned.split("\n"):
        t = ln.strip()
        if not t:
            continue
        if RULE_LINE_RE.match(t) or DIGITS_ONLY_RE.match(t):
            continue
        lines.append(t)
    return "\n".join(lines)
