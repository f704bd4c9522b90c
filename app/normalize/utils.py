from __future__ import annotations

import re
from typing import Iterable

_BULLET_CHARS = "•‣◦▪●·*–—-"
_BULLET_PATTERN = re.compile(
    rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]+\s*|\d{{1,2}}[\.\)]\s+|[A-Za-z]\)\s+)"
)
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?:\+\d{1,3}[\s.-]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_METRIC_RE = re.compile(r"\d|[$€£]\s*\d")
_NUMERIC_TOKEN_RE = re.compile(r"[$€£]?\d+(?:[.,]\d+)*%?")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_line(line: str) -> str:
    return _WHITESPACE_RE.sub(" ", line or "").strip()


def non_empty_lines(text: str) -> list[str]:
    return [stripped for stripped in (line.strip() for line in (text or "").splitlines()) if stripped]


def is_bullet_like(line: str) -> bool:
    match = _BULLET_PATTERN.match(line or "")
    return bool(match) and bool((line or "")[match.end():].strip())


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line or "", count=1).strip()


def has_metric(text: str) -> bool:
    return bool(_METRIC_RE.search(text or ""))


def numeric_tokens(text: str) -> list[str]:
    return _NUMERIC_TOKEN_RE.findall(text or "")


def has_email(text: str) -> bool:
    return bool(EMAIL_RE.search(text or ""))


def has_phone(text: str) -> bool:
    return bool(PHONE_RE.search(text or ""))


def word_count(text: str) -> int:
    return len((text or "").split())


def normalize_token(value: str) -> str:
    """Lowercase, drop anything that is not a letter, digit or space, collapse whitespace."""
    lowered = (value or "").lower()
    return _WHITESPACE_RE.sub(" ", _NON_ALNUM_RE.sub("", lowered)).strip()


def phrase_pattern(phrases: Iterable[str]) -> re.Pattern[str]:
    """Case-insensitive alternation that only matches whole words or phrases."""
    ordered = sorted({phrase.strip().lower() for phrase in phrases if phrase.strip()}, key=len, reverse=True)
    body = "|".join(re.escape(phrase) for phrase in ordered)
    return re.compile(rf"(?<![A-Za-z0-9])(?:{body})(?![A-Za-z0-9])", re.IGNORECASE)
