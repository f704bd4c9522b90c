from __future__ import annotations

import re

from app.schemas.normalized import SECTION_NAMES, SegmentedContent

from .utils import (
    has_email,
    has_metric,
    has_phone,
    is_bullet_like,
    non_empty_lines,
    normalize_line,
    strip_bullet_prefix,
    word_count,
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_MIN_SENTENCE_CHARS = 10
_MAX_HEADER_WORDS = 5

# Checked in order; the first pattern that matches the start of a short line names the section.
_SECTION_HEADER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "experience",
        re.compile(r"^(?:(?:professional|relevant)\s+)?experience\b|^work\s+(?:history|experience)\b|^employment(?:\s+history)?\b|^career\s+history\b"),
    ),
    ("education", re.compile(r"^education\b|^academic\b|^qualifications\b|^degrees?\b")),
    (
        "skills",
        re.compile(r"^(?:(?:technical|core|key)\s+)?skills\b|^(?:core\s+)?competencies\b|^proficiencies\b"),
    ),
    ("summary", re.compile(r"^(?:professional\s+)?summary\b|^(?:career\s+)?objective\b|^(?:professional\s+)?profile\b|^about(?:\s+me)?\b")),
)
_CONTACT_HEADER_RE = re.compile(r"^contact\b")
_IMPACT_VERB_RE = re.compile(
    r"\b(?:increas(?:e|ed|es|ing)|improv(?:e|ed|es|ing)|reduc(?:e|ed|es|ing)|achiev(?:e|ed|es|ing)|"
    r"deliver(?:ed|s|ing)?|exceed(?:ed|s|ing)?|generat(?:e|ed|es|ing)|sav(?:e|ed|es|ing)|"
    r"enhanc(?:e|ed|es|ing)|optimi[sz](?:e|ed|es|ing))\b",
    re.IGNORECASE,
)


def _match_header(text: str) -> str | None:
    lowered = normalize_line(text).lower().rstrip(":").strip()
    if not lowered or len(lowered.split()) > _MAX_HEADER_WORDS:
        return None
    for section, pattern in _SECTION_HEADER_PATTERNS:
        if pattern.match(lowered):
            return section
    if _CONTACT_HEADER_RE.match(lowered):
        return "contact"
    return None


def detect_section_header(line: str) -> tuple[str | None, str]:
    """Return (section, trailing content) when the line is a section header, else (None, "")."""
    head, sep, tail = line.partition(":")
    if sep and tail.strip():
        section = _match_header(head)
        if section is not None:
            return section, normalize_line(tail)
    section = _match_header(line)
    if section is not None:
        return section, ""
    return None, ""


def is_contact_line(line: str) -> bool:
    return has_email(line) or has_phone(line)


def split_sentences(text: str) -> list[str]:
    fragments = (fragment.strip() for fragment in _SENTENCE_SPLIT_RE.split(text or ""))
    return [normalize_line(fragment) for fragment in fragments if len(fragment) > _MIN_SENTENCE_CHARS]


def is_achievement(sentence: str) -> bool:
    return has_metric(sentence) and bool(_IMPACT_VERB_RE.search(sentence))


def segment_content(text: str) -> SegmentedContent:
    lines = non_empty_lines(text)
    sentences = split_sentences(text)
    bullet_points = [strip_bullet_prefix(line) for line in lines if is_bullet_like(line)]

    sections: dict[str, list[str]] = {name: [] for name in SECTION_NAMES}
    current_section: str | None = None
    for line in lines:
        header, trailing = detect_section_header(line)
        if header is not None:
            current_section = header
            if trailing:
                sections[header].append(trailing)
            continue
        if is_contact_line(line):
            current_section = "contact"
            sections["contact"].append(line)
            continue
        if current_section is not None:
            sections[current_section].append(line)

    return SegmentedContent(
        lines=lines,
        sentences=sentences,
        bullet_points=[bullet for bullet in bullet_points if bullet],
        sections=sections,
        achievements=[sentence for sentence in sentences if is_achievement(sentence)],
        word_count=word_count(text),
    )
