from __future__ import annotations

import re
from typing import Iterable

from app.core.config.scoring import get_scoring_value
from app.features.defect_classifier import count_by_category
from app.normalize.utils import numeric_tokens
from app.schemas.analysis import DefectQuote, RuleIssue
from app.schemas.normalized import SegmentedContent

_PLACEHOLDER_RE = re.compile(r"\[[^\]\n]*\]|\bTBD\b|\bTK\b|\bX{2,}\b|\bN/A\b|\?{2,}")
_MIN_EXPERIENCE_LINES = 2
_MAX_PLACEHOLDER_EVIDENCE = 5


def _rule(name: str, default: int) -> int:
    return int(get_scoring_value(f"rules.{name}", default))


def _section_issues(content: SegmentedContent) -> list[RuleIssue]:
    issues: list[RuleIssue] = []
    if not content.has_section("summary"):
        issues.append(
            RuleIssue(
                severity="high",
                category="structure",
                issue="Missing professional summary section",
                recommendation="Open with a 2-3 line summary naming your role, years of experience and strongest result.",
            )
        )
    if not content.has_section("skills"):
        issues.append(
            RuleIssue(
                severity="high",
                category="ats",
                issue="Missing skills section",
                recommendation="Add a 'Skills' section so ATS keyword matching can find your tools and competencies.",
            )
        )
    if not content.has_section("education"):
        issues.append(
            RuleIssue(
                severity="high",
                category="structure",
                issue="Missing education section",
                recommendation="Add an 'Education' section, even if it only lists your highest qualification.",
            )
        )
    if len(content.section_lines("experience")) < _MIN_EXPERIENCE_LINES:
        issues.append(
            RuleIssue(
                severity="high",
                category="structure",
                issue="Experience section is missing or too thin",
                recommendation="List each role with dates and at least two achievement bullets.",
            )
        )
    return issues


def _word_count_issue(word_count: int) -> RuleIssue | None:
    hard_min = _rule("word_count.hard_min", 150)
    hard_max = _rule("word_count.hard_max", 1000)
    soft_min = _rule("word_count.soft_min", 220)
    soft_max = _rule("word_count.soft_max", 750)

    if word_count < hard_min or word_count > hard_max:
        severity = "high"
    elif word_count < soft_min or word_count > soft_max:
        severity = "medium"
    else:
        return None

    direction = "short" if word_count < soft_min else "long"
    return RuleIssue(
        severity=severity,
        category="format",
        issue=f"Resume is too {direction} ({word_count} words; aim for {soft_min}-{soft_max})",
        evidence=f"{word_count} words",
        recommendation=(
            "Add concrete achievements for each role." if direction == "short" else "Cut older or repetitive bullets."
        ),
    )


def _bullet_length_issue(bullets: Iterable[str]) -> RuleIssue | None:
    medium = _rule("bullet_words.medium", 35)
    high = _rule("bullet_words.high", 45)

    longest = ""
    longest_words = 0
    for bullet in bullets:
        words = len(bullet.split())
        if words > longest_words:
            longest, longest_words = bullet, words

    if longest_words > high:
        severity = "high"
    elif longest_words > medium:
        severity = "medium"
    else:
        return None
    return RuleIssue(
        severity=severity,
        category="format",
        issue=f"Bullet points run too long (longest has {longest_words} words)",
        evidence=longest,
        recommendation=f"Keep bullets under {medium} words: one action, one result.",
    )


def _placeholder_issue(text: str) -> RuleIssue | None:
    tokens: list[str] = []
    for match in _PLACEHOLDER_RE.finditer(text or ""):
        token = match.group(0)
        if token not in tokens:
            tokens.append(token)
    if not tokens:
        return None
    return RuleIssue(
        severity="high",
        category="ats",
        issue="Template placeholders left in the resume",
        evidence=", ".join(tokens[:_MAX_PLACEHOLDER_EVIDENCE]),
        recommendation="Replace every placeholder with real content before sending.",
    )


def _numeric_density_issue(text: str) -> RuleIssue | None:
    minimum = _rule("min_numeric_tokens", 5)
    found = len(numeric_tokens(text))
    if found >= minimum:
        return None
    return RuleIssue(
        severity="high",
        category="impact",
        issue=f"Too few numbers to show impact ({found} found, at least {minimum} expected)",
        recommendation="Quantify results with percentages, amounts, counts or time saved.",
    )


def _quote_density_issues(quotes: list[DefectQuote]) -> list[RuleIssue]:
    threshold = _rule("quote_count_threshold", 2)
    counts = count_by_category(quotes)
    checks = (
        ("passive_voice", "verbiage", "Frequent passive voice", "Start bullets with the action you took."),
        (
            "responsibility_framing",
            "verbiage",
            "Bullets describe responsibilities rather than results",
            "Say what improved because of the work you oversaw.",
        ),
        ("unclear_impact", "impact", "Actions listed without their impact", "Close each bullet with its outcome."),
    )
    issues: list[RuleIssue] = []
    for category, rule_category, issue, recommendation in checks:
        count = counts[category]
        if count > threshold:
            issues.append(
                RuleIssue(
                    severity="medium",
                    category=rule_category,
                    issue=f"{issue} ({count} instances)",
                    recommendation=recommendation,
                )
            )
    return issues


def audit_structure(text: str, content: SegmentedContent, quotes: list[DefectQuote]) -> list[RuleIssue]:
    """Whole-document structural checks, independent of the category scorers."""
    issues = _section_issues(content)
    for issue in (
        _word_count_issue(content.word_count),
        _bullet_length_issue(content.bullet_points),
        _placeholder_issue(text),
        _numeric_density_issue(text),
    ):
        if issue is not None:
            issues.append(issue)
    issues.extend(_quote_density_issues(quotes))
    return issues


def rule_penalty(issues: Iterable[RuleIssue]) -> int:
    return sum(issue.penalty for issue in issues)
