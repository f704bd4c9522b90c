"""Rule-based defect classification over segmented résumé text.

Each candidate line runs through ``QUOTE_RULES`` in order and yields at most one
:class:`DefectQuote`: the first rule whose detector returns a hit wins. Quotes are
deduplicated by ``(category, normalized text)`` and capped.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable

from app.core.config.scoring import get_scoring_value
from app.features.lexicon import (
    DEFAULT_METRIC_CLAUSE,
    DEFAULT_WEAK_REPLACEMENT,
    IMPACT_MARKER_PREFIXES,
    IMPACT_MARKERS,
    METRIC_ACTION_VERBS,
    METRIC_CLAUSES,
    OUTCOME_ACTION_VERBS,
    OUTCOME_CLAUSE,
    PASSIVE_AGENT_SUFFIXES,
    PASSIVE_AUXILIARIES,
    SUPERVISORY_VERBS,
    VAGUE_QUANTIFIER_REPLACEMENTS,
    VAGUE_QUANTIFIERS,
    WEAK_PHRASE_REPLACEMENTS,
    WEAK_PHRASES,
)
from app.normalize.utils import has_metric, normalize_line, phrase_pattern
from app.schemas.analysis import DefectQuote, QuoteCategory
from app.schemas.normalized import SegmentedContent

logger = logging.getLogger(__name__)

_MIN_METRIC_CANDIDATE_CHARS = 20
_TRUNCATION_SUFFIX = "..."

_COMPOUND_SEPARATOR_RE = re.compile(r"\s*[;|]\s*|\s+[-–—]\s+")
_SENTENCE_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,;:!?])")

# One pattern per weak phrase so the reported phrase follows list order, not text order.
# A leading auxiliary ("Was responsible for") is swallowed by the rewrite.
_WEAK_PHRASE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (
        phrase,
        re.compile(
            rf"(?<![A-Za-z0-9])(?:(?:was|were|am|is)\s+)?{re.escape(phrase)}(?![A-Za-z0-9])",
            re.IGNORECASE,
        ),
    )
    for phrase in WEAK_PHRASES
)
_WEAK_PATTERN_BY_PHRASE = dict(_WEAK_PHRASE_PATTERNS)
_PASSIVE_RE = re.compile(
    rf"(?<![A-Za-z0-9])({'|'.join(PASSIVE_AUXILIARIES)})\s+([A-Za-z]+(?:ed|en))(?![A-Za-z0-9])",
    re.IGNORECASE,
)
# Words that end in -ed/-en without being participles.
_PASSIVE_FALSE_POSITIVES = frozenset(
    {"often", "even", "open", "when", "then", "seven", "eleven", "ten", "keen", "green", "token", "garden", "kitchen"}
)
_FIRST_PERSON_SUBJECTS = frozenset({"i", "we"})
_PASSIVE_AGENT_RE = re.compile(
    rf"\s+(?:{'|'.join(re.escape(suffix) for suffix in PASSIVE_AGENT_SUFFIXES)})(?=[\s.,;:!?]*$)",
    re.IGNORECASE,
)
_SUPERVISORY_RE = phrase_pattern(SUPERVISORY_VERBS)
_METRIC_ACTION_RE = phrase_pattern(METRIC_ACTION_VERBS)
_OUTCOME_ACTION_RE = phrase_pattern(OUTCOME_ACTION_VERBS)
_IMPACT_MARKER_RE = phrase_pattern(IMPACT_MARKERS)
_IMPACT_PREFIX_RE = re.compile(
    rf"(?<![A-Za-z0-9])(?:{'|'.join(re.escape(prefix) for prefix in IMPACT_MARKER_PREFIXES)})[a-z]*",
    re.IGNORECASE,
)
_VAGUE_RE = phrase_pattern(VAGUE_QUANTIFIERS)


@dataclass(frozen=True, slots=True)
class QuoteRule:
    """A detector returning the triggering text (or None) plus the quote builder for that hit."""

    category: QuoteCategory
    detect: Callable[[str], str | None]
    build: Callable[[str, str], tuple[str, str, str]]


def _has_impact_marker(text: str) -> bool:
    return bool(_IMPACT_MARKER_RE.search(text) or _IMPACT_PREFIX_RE.search(text))


def _match_case(source: str, replacement: str) -> str:
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _append_clause(text: str, clause: str) -> str:
    return text.rstrip(" .;:,") + clause


def _first_hit(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(0).lower() if match else None


# --- weak_language -----------------------------------------------------------------------------


def _detect_weak_language(text: str) -> str | None:
    for phrase, pattern in _WEAK_PHRASE_PATTERNS:
        if pattern.search(text):
            return phrase
    return None


def _build_weak_language(text: str, phrase: str) -> tuple[str, str, str]:
    replacement = WEAK_PHRASE_REPLACEMENTS.get(phrase, DEFAULT_WEAK_REPLACEMENT)
    improved = _WEAK_PATTERN_BY_PHRASE[phrase].sub(lambda match: _match_case(match.group(0), replacement), text)
    return (
        "Weak language detected",
        f'Uses weak, passive language: "{phrase}"',
        improved,
    )


# --- passive_voice -----------------------------------------------------------------------------


def _passive_match(text: str) -> re.Match[str] | None:
    for match in _PASSIVE_RE.finditer(text):
        if match.group(2).lower() not in _PASSIVE_FALSE_POSITIVES:
            return match
    return None


def _detect_passive_voice(text: str) -> str | None:
    match = _passive_match(text)
    return match.group(0) if match else None


def _build_passive_voice(text: str, construction: str) -> tuple[str, str, str]:
    match = _passive_match(text)
    improved = text
    if match is not None:
        subject = text[: match.start()].strip()
        rest = _PASSIVE_AGENT_RE.sub("", text[match.end():]).strip()
        participle = match.group(2)
        if subject.lower() in _FIRST_PERSON_SUBJECTS:
            subject = ""
        if len(subject) > 1 and subject[1].islower():
            subject = subject[0].lower() + subject[1:]
        parts = [participle[0].upper() + participle[1:].lower(), subject, rest]
        improved = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", " ".join(part for part in parts if part))
    return (
        "Passive voice construction",
        f'Passive construction hides who did the work: "{construction}"',
        improved,
    )


# --- responsibility_framing / missing_metrics / unclear_impact -----------------------------------


def _detect_responsibility_framing(text: str) -> str | None:
    if has_metric(text) or _has_impact_marker(text):
        return None
    return _first_hit(_SUPERVISORY_RE, text)


def _build_responsibility_framing(text: str, verb: str) -> tuple[str, str, str]:
    return (
        "Duties listed without outcome",
        f'Describes oversight ("{verb}") without a measurable outcome',
        _append_clause(text, OUTCOME_CLAUSE),
    )


def _detect_missing_metrics(text: str) -> str | None:
    if len(text) <= _MIN_METRIC_CANDIDATE_CHARS or has_metric(text):
        return None
    return _first_hit(_METRIC_ACTION_RE, text)


def _metric_clause(text: str) -> str:
    lowered = text.lower()
    for keywords, clause in METRIC_CLAUSES:
        if any(keyword in lowered for keyword in keywords):
            return clause
    return DEFAULT_METRIC_CLAUSE


def _build_missing_metrics(text: str, verb: str) -> tuple[str, str, str]:
    return (
        "Achievement without quantification",
        "Missing specific numbers, percentages, or measurable impact",
        _append_clause(text, _metric_clause(text)),
    )


def _detect_unclear_impact(text: str) -> str | None:
    if has_metric(text) or _has_impact_marker(text):
        return None
    return _first_hit(_OUTCOME_ACTION_RE, text)


def _build_unclear_impact(text: str, verb: str) -> tuple[str, str, str]:
    return (
        "Action without stated impact",
        f'States what was done ("{verb}") but not the result it produced',
        _append_clause(text, OUTCOME_CLAUSE),
    )


# --- generic_description -----------------------------------------------------------------------


def _detect_generic_description(text: str) -> str | None:
    return _first_hit(_VAGUE_RE, text)


def _build_generic_description(text: str, word: str) -> tuple[str, str, str]:
    improved = _VAGUE_RE.sub(
        lambda match: _match_case(match.group(0), VAGUE_QUANTIFIER_REPLACEMENTS[match.group(0).lower()]),
        text,
    )
    return (
        "Generic, vague description",
        "Too vague - lacks specific details about your unique contributions",
        improved,
    )


QUOTE_RULES: tuple[QuoteRule, ...] = (
    QuoteRule("weak_language", _detect_weak_language, _build_weak_language),
    QuoteRule("passive_voice", _detect_passive_voice, _build_passive_voice),
    QuoteRule("responsibility_framing", _detect_responsibility_framing, _build_responsibility_framing),
    QuoteRule("missing_metrics", _detect_missing_metrics, _build_missing_metrics),
    QuoteRule("unclear_impact", _detect_unclear_impact, _build_unclear_impact),
    QuoteRule("generic_description", _detect_generic_description, _build_generic_description),
)


def split_compound_bullet(bullet: str, max_chars: int | None = None) -> list[str]:
    limit = max_chars if max_chars is not None else int(get_scoring_value("quotes.split_bullet_chars", 180))
    if len(bullet) <= limit and not _COMPOUND_SEPARATOR_RE.search(bullet):
        return [bullet]

    parts: list[str] = []
    for part in _COMPOUND_SEPARATOR_RE.split(bullet):
        part = part.strip()
        if not part:
            continue
        if len(part) > limit:
            parts.extend(piece.strip() for piece in _SENTENCE_BOUNDARY_RE.split(part) if piece.strip())
        else:
            parts.append(part)
    return parts if len(parts) > 1 else [bullet]


def build_candidates(content: SegmentedContent) -> list[str]:
    if not content.bullet_points:
        return list(content.sentences)
    candidates: list[str] = []
    for bullet in content.bullet_points:
        candidates.extend(split_compound_bullet(bullet))
    return candidates


def truncate_quote(text: str, max_chars: int | None = None) -> str:
    limit = max_chars if max_chars is not None else int(get_scoring_value("quotes.max_text_chars", 200))
    if len(text) <= limit:
        return text
    return text[: limit - len(_TRUNCATION_SUFFIX)].rstrip() + _TRUNCATION_SUFFIX


def quote_key(category: str, text: str) -> tuple[str, str]:
    return category, normalize_line(text).lower().rstrip(" .")


def classify_candidate(text: str) -> DefectQuote | None:
    """Return the quote for the first rule that fires on ``text``, or None for a clean line."""
    for rule in QUOTE_RULES:
        hit = rule.detect(text)
        if hit is None:
            continue
        context, issue, improved = rule.build(text, hit)
        return DefectQuote(
            original_text=truncate_quote(text),
            context=context,
            issue=issue,
            suggested_improvement=improved,
            category=rule.category,
        )
    return None


def extract_defect_quotes(content: SegmentedContent) -> list[DefectQuote]:
    min_chars = int(get_scoring_value("quotes.min_candidate_chars", 12))
    max_quotes = int(get_scoring_value("quotes.max_quotes", 20))

    candidates = build_candidates(content)
    quotes: list[DefectQuote] = []
    seen: set[tuple[str, str]] = set()
    for candidate in candidates:
        text = normalize_line(candidate)
        if len(text) < min_chars:
            continue
        quote = classify_candidate(text)
        if quote is None:
            continue
        key = quote_key(quote.category, quote.original_text)
        if key in seen:
            continue
        seen.add(key)
        quotes.append(quote)
        if len(quotes) >= max_quotes:
            break

    logger.debug("defect_quotes_extracted candidates=%s quotes=%s", len(candidates), len(quotes))
    return quotes


def count_by_category(quotes: Iterable[DefectQuote]) -> Counter[str]:
    return Counter(quote.category for quote in quotes)
