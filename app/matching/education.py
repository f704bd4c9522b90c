from __future__ import annotations

import re

# Canonical labels emitted for résumés, highest level first.
EDUCATION_LEVELS: tuple[str, ...] = ("PhD", "Masters", "Bachelors", "Associates")

# Degree abbreviations are matched case-sensitively so "ms" or "as" in prose does not count.
_MS_SOFTWARE = r"(?!\s+(?:Office|Excel|Word|Access|Teams|Project|SQL|Outlook|PowerPoint|Dynamics|Visio)\b)"
_RESUME_LEVEL_PATTERNS: tuple[tuple[str, tuple[re.Pattern[str], ...]], ...] = (
    (
        "PhD",
        (re.compile(r"\bph\.?\s?d\b|\bdoctorate\b|\bdoctoral\b", re.IGNORECASE),),
    ),
    (
        "Masters",
        (
            re.compile(r"\bmaster(?:'?s)?\s+(?:of|degree|in)\b|\bmaster's\b|\bmba\b", re.IGNORECASE),
            re.compile(rf"(?<![A-Za-z.])(?:M\.S\.|M\.A\.|M\.Sc\.?|MSc|MS{_MS_SOFTWARE}|(?<!, )MA)(?![A-Za-z])"),
        ),
    ),
    (
        "Bachelors",
        (
            re.compile(r"\bbachelor(?:'?s)?\b", re.IGNORECASE),
            re.compile(r"(?<![A-Za-z.])(?:B\.S\.|B\.A\.|B\.Sc\.?|BSc|BS|BA)(?![A-Za-z])"),
        ),
    ),
    (
        "Associates",
        (
            re.compile(r"\bassociate(?:'?s)?\s+(?:of|degree|in)\b|\bassociate's\b", re.IGNORECASE),
            re.compile(r"(?<![A-Za-z.])(?:A\.S\.|A\.A\.|AAS)(?![A-Za-z])|\b(?:AA|AS)\s+(?:in|degree)\b"),
        ),
    ),
)

# Ordinal ladder used when comparing against job requirements; checked lowest first.
_RANK_PATTERNS: tuple[tuple[int, re.Pattern[str]], ...] = (
    (1, re.compile(r"high\s*school|\bged\b|secondary\s+school", re.IGNORECASE)),
    (2, re.compile(r"\bassociate(?:'?s)?\b|\ba\.[as]\.", re.IGNORECASE)),
    (3, re.compile(r"\bbachelor(?:'?s)?\b|\bb\.?s\.?c?\b|\bb\.a\.|\bba\b|undergraduate", re.IGNORECASE)),
    (4, re.compile(r"\bmaster(?:'?s)?\b|\bm\.?s\.?c?\b|\bmba\b|\bm\.a\.|\bma\b|(?<!under)graduate\s+degree", re.IGNORECASE)),
    (5, re.compile(r"\bph\.?\s?d\b|\bdoctora(?:te|l)\b", re.IGNORECASE)),
)


def extract_education_levels(text: str) -> list[str]:
    """Every degree level mentioned in the text, highest first; not only the top one."""
    levels: list[str] = []
    for level, patterns in _RESUME_LEVEL_PATTERNS:
        if any(pattern.search(text or "") for pattern in patterns):
            levels.append(level)
    return levels


def education_rank(label: str, *, lowest: bool = False) -> int:
    """Ordinal rank of an education label: HS/GED 1 .. PhD 5, 0 when nothing is recognized.

    A requirement such as "Bachelor's or Master's" names alternatives, so callers ranking
    requirements pass ``lowest=True`` to take the least demanding level mentioned.
    """
    ranks = [rank for rank, pattern in _RANK_PATTERNS if pattern.search(label or "")]
    if not ranks:
        return 0
    return min(ranks) if lowest else max(ranks)
