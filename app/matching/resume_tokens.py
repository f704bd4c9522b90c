from __future__ import annotations

import re
from datetime import datetime, timezone
from functools import lru_cache

from app.schemas.normalized import ResumeTokens
from app.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .education import extract_education_levels

_EXPLICIT_YEARS_RE = re.compile(r"(?<!\d)(\d{1,2})\+?\s*years?\s*(?:of\s+)?(?:\w+\s+)?experience", re.IGNORECASE)
_DATE_RANGE_RE = re.compile(
    r"\b((?:19|20)\d{2})\s*(?:-|–|—|to)\s*((?:19|20)\d{2}|present|current|now)\b",
    re.IGNORECASE,
)
_SHORT_TERM_CHARS = 3


@lru_cache(maxsize=8)
def _short_term_patterns(vocabulary: tuple[str, ...]) -> dict[str, re.Pattern[str]]:
    # Short terms such as "go" or "ace" must stand on token boundaries.
    return {
        term: re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9+#])")
        for term in vocabulary
        if len(term) <= _SHORT_TERM_CHARS
    }


def _has_term(term: str, lowered: str, short_patterns: dict[str, re.Pattern[str]]) -> bool:
    pattern = short_patterns.get(term)
    if pattern is not None:
        return bool(pattern.search(lowered))
    return term in lowered


def extract_experience_years(text: str, reference_year: int | None = None) -> int:
    explicit = _EXPLICIT_YEARS_RE.search(text or "")
    if explicit:
        return int(explicit.group(1))

    current_year = reference_year if reference_year is not None else datetime.now(timezone.utc).year
    total = 0
    for match in _DATE_RANGE_RE.finditer(text or ""):
        start = int(match.group(1))
        end_raw = match.group(2)
        end = int(end_raw) if end_raw.isdigit() else current_year
        total += max(0, end - start)
    return total


def extract_skills(text: str, taxonomy: TaxonomyProvider | None = None) -> list[str]:
    provider = taxonomy or get_default_taxonomy_provider()
    vocabulary = provider.skill_vocabulary()
    short_patterns = _short_term_patterns(vocabulary)
    lowered = (text or "").lower()
    return [term for term in vocabulary if _has_term(term, lowered, short_patterns)]


def extract_resume_tokens(
    text: str,
    reference_year: int | None = None,
    taxonomy: TaxonomyProvider | None = None,
) -> ResumeTokens:
    """Flat skill, experience and education signals for matching; independent of section parsing."""
    return ResumeTokens(
        skills=extract_skills(text, taxonomy),
        experience_years=extract_experience_years(text, reference_year),
        education_levels=extract_education_levels(text),
        raw_text=text or "",
    )
