"""
Heuristic profile parser: free text in, ProfileRecord out.

Single forward pass over normalized lines. Each line is tried, in order, as:
contact info (skipped) -> name -> headline -> section header -> section content.
A single current-section value plus one content buffer and one entry buffer carry
all state between lines; nothing else is shared between calls.
"""

import logging
import re
from typing import List, Optional, Sequence

from app.core.schemas import ProfileRecord
from app.core.section_detector import (
    Section,
    detect_section,
    has_experience_date,
    is_education_entry_start,
    is_job_entry_start,
)
from app.core.text_normalization import is_contact_info, is_noise_line, normalize_lines

logger = logging.getLogger(__name__)


# ===== RECORD LIMITS =====

MAX_EXPERIENCE = 30
MAX_SKILLS = 100
MAX_EDUCATION = 15
MAX_CERTIFICATIONS = 30

# Minimum length (exclusive) of a flushed entry block
MIN_EXPERIENCE_ENTRY = 5
MIN_EDUCATION_ENTRY = 3

# About fallback: unclaimed lines before any section header
MIN_ABOUT_FALLBACK = 15


# ===== NAME / HEADLINE VOCABULARY =====

NAME_STOPWORDS = {"the", "and", "or", "of", "in", "at", "to", "for", "with", "by", "inc", "llc", "corp", "ltd"}

HEADLINE_KEYWORDS = (
    "manager", "developer", "engineer", "director", "specialist", "analyst",
    "consultant", "coordinator", "supervisor", "lead", "senior", "junior",
    "marketing", "sales", "product", "software", "data", "business",
    "executive", "officer", "administrator", "designer", "architect",
    "strategist", "expert", "professional", "associate", "assistant",
    "student", "intern", "freelancer", "entrepreneur", "founder", "ceo",
    "cto", "cfo", "vp", "vice president", "head of", "chief", "principal",
    "scientist", "researcher", "technician", "representative", "agent",
    "owner", "partner", "president", "team lead", "project manager",
)

HEADLINE_SEPARATORS = ("|", "•", "-", " at ", " @ ")

JOB_SEEKING_PHRASES = ("seeking", "looking for", "open to", "available for")


# ===== SKILLS =====

# Applied in order; every pass splits all fragments produced by the previous one.
SKILL_DELIMITERS = [",", "•", "|", ";", "\n", "·", "/", "&", "\\", "+", ":", "–", "-", "(", ")", "[", "]", "{", "}"]

SKILL_STOPWORDS = {"and", "or", "the", "of", "in", "at", "to", "for", "with", "by", "a", "an"}
DIGITS_RE = re.compile(r"^\d+$")


def _is_name_word(word: str) -> bool:
    if len(word) <= 1 or not word[0].isupper():
        return False
    return all(ch.isalpha() or ch in "-'." for ch in word)


def is_likely_name(line: str) -> bool:
    """
    2-4 capitalized words of letters/hyphen/apostrophe/period, none of them a stopword.

    Examples:
        "Jane A. Doe" -> True
        "Mary-Kate O'Neil" -> True
        "Acme Corp" -> False (corporate suffix)
        "Senior Software Engineer at Acme" -> False (too many words)
    """
    words = [w for w in line.split(" ") if w]
    if len(words) < 2 or len(words) > 4:
        return False
    if not all(_is_name_word(w) for w in words):
        return False
    return not any(w.lower() in NAME_STOPWORDS for w in words)


def is_likely_headline(line: str) -> bool:
    """
    Role keyword, separator or job-seeking phrase, within 8-150 chars,
    starting with a capital and not ending with a period.
    """
    lower = line.lower()
    has_keyword = any(k in lower for k in HEADLINE_KEYWORDS)
    has_separator = any(s in line for s in HEADLINE_SEPARATORS)
    is_job_seeking = any(p in lower for p in JOB_SEEKING_PHRASES)

    good_length = 8 <= len(line) <= 150
    has_structure = (
        line[:1].isupper()
        and (" " in line or len(line) > 10)
        and not line.endswith(".")
    )
    return (has_keyword or has_separator or is_job_seeking) and good_length and has_structure


def tokenize_skills(text: str) -> List[str]:
    """
    Split a skills blob into individual skills.

    Examples:
        "Python/Go, Data-Analysis; SQL" -> ["Python", "Go", "Data", "Analysis", "SQL"]
        "Leadership & Strategy • 2019" -> ["Leadership", "Strategy"]
    """
    fragments = [text]
    for delim in SKILL_DELIMITERS:
        fragments = [piece for frag in fragments for piece in frag.split(delim)]

    out: List[str] = []
    for frag in fragments:
        s = frag.strip()
        if not (1 < len(s) < 100):
            continue
        if is_noise_line(s) or DIGITS_RE.match(s):
            continue
        if s.lower() in SKILL_STOPWORDS:
            continue
        if not any(ch.isalpha() for ch in s):
            continue
        out.append(s)
    return out[:MAX_SKILLS]


def _dedupe(items: Sequence[str], min_len: int, cap: int) -> List[str]:
    """First occurrence wins; drops entries whose stripped length is <= min_len."""
    unique = list(dict.fromkeys(items))
    return [x for x in unique if len(x.strip()) > min_len][:cap]


def clean_profile(profile: ProfileRecord) -> ProfileRecord:
    """
    Final cleanup pass: trim text fields, dedupe and cap the lists.

    Idempotent: clean_profile(clean_profile(p)) == clean_profile(p).
    """
    return ProfileRecord(
        name=profile.name.strip(),
        headline=profile.headline.strip(),
        about=profile.about.strip(),
        experience=_dedupe(profile.experience, 3, MAX_EXPERIENCE),
        skills=_dedupe(profile.skills, 1, MAX_SKILLS),
        education=_dedupe(profile.education, 3, MAX_EDUCATION),
        certifications=_dedupe(profile.certifications, 0, MAX_CERTIFICATIONS),
    )


class ProfileAccumulator:
    """
    Mutable state for one parse. Feed lines with `consume`, then call `finish` once.

    `section` is the only mode switch. `content` buffers ABOUT/SKILLS/CERTIFICATIONS
    (and NONE, which is discarded); `entry` buffers the pending experience or
    education block.
    """

    def __init__(self) -> None:
        self.name = ""
        self.headline = ""
        self.about = ""
        self.experience: List[str] = []
        self.skills: List[str] = []
        self.education: List[str] = []
        self.certifications: List[str] = []

        self.section = Section.NONE
        self.content: List[str] = []
        self.entry: List[str] = []
        # Set once the pending experience entry holds a date or a description line
        self.entry_anchored = False
        self._finished = False

    # --- line handling ---

    def consume(self, line: str) -> None:
        if self._finished:
            raise RuntimeError("accumulator already finished")

        if is_contact_info(line):
            return

        if not self.name and is_likely_name(line):
            self.name = line
            logger.debug(f"Name detected: '{line}'")
            return

        if self.name and not self.headline and is_likely_headline(line):
            self.headline = line
            logger.debug(f"Headline detected: '{line}'")
            return

        section = detect_section(line)
        if section is not None:
            self.enter(section)
            return

        if self.section == Section.EXPERIENCE:
            self._consume_experience(line)
        elif self.section == Section.EDUCATION:
            self._consume_education(line)
        else:
            if self.section == Section.NONE and not self.about:
                if len(line) > MIN_ABOUT_FALLBACK and not is_likely_headline(line) and not is_likely_name(line):
                    self.about = line
                    logger.debug("About captured from unsectioned line")
            self.content.append(line)

    def _consume_experience(self, line: str) -> None:
        starts_entry = is_job_entry_start(line)
        if starts_entry and self.entry and self.entry_anchored:
            self._flush_entry()
        self.entry.append(line)
        if not starts_entry or has_experience_date(line):
            self.entry_anchored = True

    def _consume_education(self, line: str) -> None:
        if is_education_entry_start(line) and self.entry:
            self._flush_entry()
        self.entry.append(line)

    # --- transitions ---

    def enter(self, section: Section) -> None:
        logger.debug(f"Section change: {self.section.value} -> {section.value}")
        self.finalize_section()
        self.section = section
        self.content = []
        self.entry = []
        self.entry_anchored = False

    def _flush_entry(self) -> None:
        block = "\n".join(self.entry).strip()
        self.entry = []
        self.entry_anchored = False
        if self.section == Section.EXPERIENCE:
            if len(block) > MIN_EXPERIENCE_ENTRY:
                self.experience.append(block)
                logger.debug(f"Experience entry #{len(self.experience)} flushed ({len(block)} chars)")
        elif self.section == Section.EDUCATION:
            if len(block) > MIN_EDUCATION_ENTRY:
                self.education.append(block)
                logger.debug(f"Education entry #{len(self.education)} flushed ({len(block)} chars)")

    def finalize_section(self) -> None:
        """Commit whatever the current section has buffered."""
        if self.section in (Section.EXPERIENCE, Section.EDUCATION):
            if self.entry:
                self._flush_entry()
            return

        if not self.content:
            return

        if self.section == Section.ABOUT:
            text = " ".join(self.content).strip()
            if not self.about and text:
                self.about = text
        elif self.section == Section.SKILLS:
            self.skills.extend(tokenize_skills(" ".join(self.content).strip()))
        elif self.section == Section.CERTIFICATIONS:
            self.certifications.extend(ln for ln in self.content if ln.strip())
        # NONE: unclaimed preamble is dropped
        self.content = []

    def finish(self) -> ProfileRecord:
        """Flush the last section and return the cleaned, frozen record. Call once."""
        if self._finished:
            raise RuntimeError("accumulator already finished")
        self.finalize_section()
        self._finished = True
        return clean_profile(
            ProfileRecord(
                name=self.name,
                headline=self.headline,
                about=self.about,
                experience=self.experience,
                skills=self.skills,
                education=self.education,
                certifications=self.certifications,
            )
        )


def parse_profile_text(raw_text: Optional[str]) -> ProfileRecord:
    """
    Parse free-form profile text into a ProfileRecord.

    Best effort and never raises on content: text without recognizable structure
    yields empty fields. Deciding whether a sparse record is acceptable is the
    caller's job (see app.core.quality.is_meaningful).
    """
    if raw_text is None:
        raw_text = ""
    elif not isinstance(raw_text, str):
        raw_text = str(raw_text)

    lines = normalize_lines(raw_text)
    acc = ProfileAccumulator()
    for line in lines:
        acc.consume(line)
    profile = acc.finish()

    logger.debug(
        f"Parsed {len(lines)} lines: name={bool(profile.name)}, headline={bool(profile.headline)}, "
        f"about={len(profile.about)} chars, experience={len(profile.experience)}, "
        f"skills={len(profile.skills)}, education={len(profile.education)}, "
        f"certifications={len(profile.certifications)}"
    )
    return profile
