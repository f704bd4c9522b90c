from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

from app.core.config.scoring import category_cap, get_scoring_value
from app.features.defect_classifier import count_by_category
from app.features.lexicon import SKILL_KEYWORDS, STANDARD_HEADERS, STRONG_ACTION_WORDS
from app.normalize.utils import EMAIL_RE, PHONE_RE, phrase_pattern
from app.schemas.analysis import CategoryScore, Deduction, DefectQuote, ScoreBreakdown, ScoreLevel
from app.schemas.normalized import SegmentedContent

_STRONG_ACTION_RE = phrase_pattern(STRONG_ACTION_WORDS)
_SKILL_KEYWORD_RE = phrase_pattern(SKILL_KEYWORDS)
_STANDARD_HEADER_RES = tuple((header, phrase_pattern([header])) for header in STANDARD_HEADERS)
# Anything outside word characters, whitespace and everyday punctuation.
_SPECIAL_CHAR_RE = re.compile(r"[^\w\s@.,;:'\"()/%$&+#\-]")

_MAX_SPECIAL_CHARS = 15
_MAX_FORMATTING_WORD_DEFICIT_POINTS = 6
_MIN_SUMMARY_CHARS = 80
_MIN_EXPERIENCE_CHARS = 200
_MIN_SKILLS_CHARS = 50
_MAX_ACHIEVEMENT_POSITIVES = 3


@dataclass(frozen=True)
class _CategoryText:
    explanation: str
    why_it_matters: str
    # (minimum score, assessment) pairs checked in order, then the fallback.
    assessments: tuple[tuple[int, str], ...]
    fallback: str


_CATEGORY_TEXT: dict[str, _CategoryText] = {
    "formatting": _CategoryText(
        explanation="Formatting assessment based on strict professional standards",
        why_it_matters=(
            "Poor formatting can eliminate you before content review. HR managers judge professionalism instantly."
        ),
        assessments=(
            (20, "Formatting meets professional standards"),
            (15, "Formatting has notable issues affecting professionalism"),
        ),
        fallback="Significant formatting problems that hurt first impression",
    ),
    "keywords": _CategoryText(
        explanation="Keyword analysis based on ATS requirements and impact demonstration",
        why_it_matters="ATS systems reject 75% of resumes. Weak language and missing metrics signal inexperience.",
        assessments=(
            (25, "Strong keyword optimization with measurable achievements"),
            (18, "Adequate keywords but needs more quantification"),
        ),
        fallback="Weak keyword strategy hurts ATS ranking and credibility",
    ),
    "content": _CategoryText(
        explanation="Content quality based on achievement demonstration and value proposition",
        why_it_matters="HR managers need proof of impact, not job duty lists. Generic content suggests inexperience.",
        assessments=(
            (20, "Content effectively demonstrates value through specific achievements"),
            (15, "Content adequate but needs stronger achievement focus"),
        ),
        fallback="Content fails to differentiate candidate - appears inexperienced",
    ),
    "ats_compatibility": _CategoryText(
        explanation="ATS compatibility based on parsing requirements",
        why_it_matters=(
            "75% of resumes are rejected by ATS before human review. Incompatibility = automatic rejection."
        ),
        assessments=(
            (17, "High ATS compatibility - should parse correctly"),
            (12, "Moderate ATS compatibility with some parsing risks"),
        ),
        fallback="Poor ATS compatibility - likely to be rejected automatically",
    ),
}


def score_level(score: int, max_score: int) -> ScoreLevel:
    ratio = score / max_score if max_score else 0.0
    if ratio >= float(get_scoring_value("levels.excellent", 0.85)):
        return "excellent"
    if ratio >= float(get_scoring_value("levels.good", 0.70)):
        return "good"
    if ratio >= float(get_scoring_value("levels.needs_improvement", 0.55)):
        return "needs_improvement"
    return "poor"


def file_extension(file_name: str) -> str:
    name = (file_name or "").strip().lower()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1]


def has_allowed_extension(file_name: str) -> bool:
    allowed = get_scoring_value("formatting.allowed_extensions", ["pdf", "docx"])
    return file_extension(file_name) in {str(ext).lower() for ext in allowed}


@dataclass
class _ScoreLedger:
    """Running deduction ledger for one category; the score is always derived from it."""

    category: str
    max_score: int
    issues: list[str] = field(default_factory=list)
    positives: list[str] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    deductions: list[Deduction] = field(default_factory=list)

    @classmethod
    def for_category(cls, category: str) -> "_ScoreLedger":
        return cls(category=category, max_score=category_cap(category))

    def deduct(self, points: int, issue: str) -> None:
        self.deductions.append(Deduction(reason=issue, points=points))
        self.issues.append(issue)

    def note(self, issue: str) -> None:
        self.issues.append(issue)

    def positive(self, text: str, example: str | None = None) -> None:
        self.positives.append(text)
        if example:
            self.examples.append(example)

    @property
    def score(self) -> int:
        return max(0, self.max_score - sum(item.points for item in self.deductions))

    def build(self) -> CategoryScore:
        text = _CATEGORY_TEXT[self.category]
        score = self.score
        assessment = next(
            (message for threshold, message in text.assessments if score >= threshold),
            text.fallback,
        )
        return CategoryScore(
            score=score,
            max_score=self.max_score,
            level=score_level(score, self.max_score),
            explanation=text.explanation,
            why_it_matters=text.why_it_matters,
            assessment=assessment,
            specific_issues=self.issues,
            positive_points=self.positives,
            examples_from_resume=self.examples,
            deductions=self.deductions,
        )


def _distinct_hits(pattern: re.Pattern[str], text: str) -> list[str]:
    hits: list[str] = []
    for match in pattern.finditer(text or ""):
        value = match.group(0).lower()
        if value not in hits:
            hits.append(value)
    return hits


def _word_deficit_points(word_count: int, min_words: int) -> int:
    deficit = max(0, min_words - word_count)
    scaled = math.ceil(_MAX_FORMATTING_WORD_DEFICIT_POINTS * deficit / min_words) if min_words else 0
    return min(_MAX_FORMATTING_WORD_DEFICIT_POINTS, max(1, scaled))


def score_formatting(text: str, file_name: str, content: SegmentedContent) -> CategoryScore:
    ledger = _ScoreLedger.for_category("formatting")

    if has_allowed_extension(file_name):
        ledger.positive("Professional file format")
    else:
        ledger.deduct(5, "File format is not ATS-friendly - use PDF or DOCX only")

    email = EMAIL_RE.search(text or "")
    phone = PHONE_RE.search(text or "")
    if email is None:
        ledger.deduct(4, "Missing or improperly formatted email address")
    if phone is None:
        ledger.deduct(4, "Missing or improperly formatted phone number")
    if email is not None and phone is not None:
        ledger.positive("Contact information properly formatted", f"Contact: {email.group(0)}, {phone.group(0)}")

    words = content.word_count
    min_words = int(get_scoring_value("formatting.min_words", 250))
    max_words = int(get_scoring_value("formatting.max_words", 600))
    if words < min_words:
        ledger.deduct(
            _word_deficit_points(words, min_words),
            f"Resume too brief ({words} words) - insufficient detail to assess qualifications",
        )
    elif words > max_words:
        ledger.deduct(3, f"Resume too long ({words} words) - HR managers will lose interest")
    else:
        ledger.positive(f"Appropriate length ({words} words)")

    missing = [name for name in STANDARD_HEADERS if not content.has_section(name)]
    if missing:
        ledger.deduct(4, f"Missing required sections: {', '.join(missing)}")
    else:
        ledger.positive("All standard sections present")

    if not content.has_section("summary"):
        ledger.deduct(3, "Missing professional summary - critical for first impression")

    return ledger.build()


def score_keywords(text: str, content: SegmentedContent, quotes: list[DefectQuote]) -> CategoryScore:
    ledger = _ScoreLedger.for_category("keywords")
    counts = count_by_category(quotes)

    weak = counts["weak_language"]
    if weak > 5:
        ledger.deduct(12, f"Excessive weak language ({weak} instances) - shows lack of ownership")
    elif weak > 2:
        ledger.deduct(6, f"Multiple instances of weak language ({weak}) - undermines impact")
    elif weak > 0:
        ledger.deduct(3, f"Weak language detected ({weak}) - use stronger action verbs")

    passive = counts["passive_voice"]
    if passive > 2:
        ledger.deduct(4, f"Frequent passive voice ({passive} instances) - hides your ownership of results")
    elif passive > 0:
        ledger.deduct(2, f"Passive voice detected ({passive}) - lead with what you did")

    framing = counts["responsibility_framing"]
    if framing > 1:
        ledger.deduct(3, f"Several bullets list duties instead of results ({framing})")
    elif framing > 0:
        ledger.deduct(2, f"A bullet lists duties instead of results ({framing})")

    unclear = counts["unclear_impact"]
    if unclear > 1:
        ledger.deduct(3, f"Several actions have no stated impact ({unclear})")
    elif unclear > 0:
        ledger.deduct(2, f"An action has no stated impact ({unclear})")

    verbs = _distinct_hits(_STRONG_ACTION_RE, text)
    if len(verbs) >= 6:
        ledger.positive(f"Strong action verb variety ({len(verbs)})", f"Action verbs: {', '.join(verbs[:5])}")
    elif len(verbs) >= 3:
        ledger.positive(f"Adequate action verbs ({len(verbs)})")
        ledger.deduct(4, "Add more variety in action verbs for stronger impact")
    else:
        ledger.deduct(8, "Severely lacking strong action verbs - content appears passive")

    achievements = len(content.achievements)
    if achievements == 0:
        ledger.deduct(10, "ZERO quantified achievements - impossible to assess impact")
    elif achievements < 3:
        ledger.deduct(6, f"Insufficient quantified achievements ({achievements}) - cannot demonstrate value")
    else:
        ledger.positive(f"Good quantification ({achievements} achievements)", "Quantified results found")

    missing_metrics = counts["missing_metrics"]
    if missing_metrics > 3:
        ledger.deduct(4, f"Many statements lack metrics ({missing_metrics}) - show measurable impact")

    if len(_distinct_hits(_SKILL_KEYWORD_RE, text)) < 3:
        ledger.deduct(3, "Insufficient technical skills keywords - may not match ATS requirements")

    return ledger.build()


def score_content(content: SegmentedContent, quotes: list[DefectQuote]) -> CategoryScore:
    ledger = _ScoreLedger.for_category("content")
    counts = count_by_category(quotes)

    summary = content.section_text("summary")
    if not summary:
        ledger.deduct(5, "Missing professional summary - critical first impression failure")
    elif len(summary) < _MIN_SUMMARY_CHARS:
        ledger.deduct(3, "Professional summary too brief - fails to establish value proposition")
        ledger.examples.append(f'Brief summary: "{summary}"')
    else:
        ledger.positive("Professional summary present", f'Summary: "{summary[:_MIN_SUMMARY_CHARS]}..."')

    achievements = content.achievements
    if not achievements and counts["weak_language"] > 3:
        ledger.deduct(8, "Content focused entirely on duties rather than achievements - shows no impact")
    elif len(achievements) < 2:
        ledger.deduct(5, "Minimal achievement focus - mostly job duties listed")
    else:
        ledger.positive(f"Achievement-focused content ({len(achievements)} quantified results)")
    for achievement in achievements[:_MAX_ACHIEVEMENT_POSITIVES]:
        ledger.positive(f'Quantified achievement: "{achievement}"')

    for category, label in (("responsibility_framing", "duty-focused bullets"), ("unclear_impact", "actions without results")):
        count = counts[category]
        if count > 2:
            ledger.deduct(3, f"Too many {label} ({count}) - show what changed because of you")
        elif count > 0:
            ledger.deduct(2, f"Some {label} ({count}) - add the outcome")

    if len(content.section_text("experience")) < _MIN_EXPERIENCE_CHARS:
        ledger.deduct(4, "Work experience section lacks sufficient detail")
    else:
        ledger.positive("Comprehensive work experience")

    skills = content.section_text("skills")
    if len(skills) < _MIN_SKILLS_CHARS:
        ledger.deduct(3, "Skills section inadequate - insufficient detail")
    else:
        ledger.positive("Skills section present", f'Skills: "{skills[:60]}..."')

    generic = counts["generic_description"]
    if generic > 2:
        ledger.deduct(3, f"Content too generic ({generic} vague descriptions) - lacks specific contributions")

    return ledger.build()


def score_ats(text: str, file_name: str, content: SegmentedContent) -> CategoryScore:
    ledger = _ScoreLedger.for_category("ats_compatibility")

    if has_allowed_extension(file_name):
        ledger.positive("ATS-compatible file format")
    else:
        ledger.deduct(6, "File format incompatible with most ATS systems")

    found = [header for header, pattern in _STANDARD_HEADER_RES if pattern.search(text or "")]
    if len(found) < len(STANDARD_HEADERS):
        missing = [header for header in STANDARD_HEADERS if header not in found]
        ledger.deduct(5, f"Missing standard headers: {', '.join(missing)}")
    else:
        ledger.positive("Standard section headers used", f"Headers: {', '.join(found)}")

    if EMAIL_RE.search(text or "") and PHONE_RE.search(text or ""):
        ledger.positive("Contact information ATS-readable")
    else:
        ledger.deduct(4, "Contact information not in ATS-parseable format")

    if len(_SPECIAL_CHAR_RE.findall(text or "")) > _MAX_SPECIAL_CHARS:
        ledger.deduct(2, "Excessive special characters may confuse ATS parsing")

    return ledger.build()


def score_categories(
    text: str,
    file_name: str,
    content: SegmentedContent,
    quotes: list[DefectQuote],
) -> ScoreBreakdown:
    return ScoreBreakdown(
        formatting=score_formatting(text, file_name, content),
        keywords=score_keywords(text, content, quotes),
        content=score_content(content, quotes),
        ats_compatibility=score_ats(text, file_name, content),
    )
