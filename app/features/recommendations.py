from __future__ import annotations

from app.core.config.scoring import get_scoring_value
from app.schemas.analysis import (
    DefectQuote,
    EducationalInsight,
    HRPerspective,
    LikelyOutcome,
    Priority,
    Recommendation,
    ScoreBreakdown,
)

_HIGH_PRIORITY_CATEGORIES = frozenset({"weak_language", "missing_metrics"})
_SOLUTION = "Rewrite with specific, measurable language"
_IMPACT_BY_PRIORITY: dict[str, str] = {
    "high": "Critical - significantly impacts ATS ranking and credibility",
    "medium": "Important - affects professional perception",
    "low": "Minor - polish for a stronger impression",
}
_TIME_TO_FIX = "15-20 minutes"
_TIME_TO_REVIEW = "6-10 seconds"
_CONCERN_EXCERPT_CHARS = 60
_MAX_CONCERNING_ELEMENTS = 3
_MAX_SPECIFIC_CONCERNS = 2
_MAX_STANDOUT_ELEMENTS = 2

_BASELINE_INSIGHT = EducationalInsight(
    topic="Why Your Score Might Be Lower Than Expected",
    explanation=(
        "This scoring system uses professional standards, not grade inflation. "
        "A score below 70 indicates real issues that HR managers notice immediately."
    ),
    better_example="Strong resumes demonstrate measurable impact, not just job duties",
    tip="Rewrite your weakest bullets first: lead with an action verb and end with a number.",
)

# One insight per defect category, in this order, when the category is present.
_CATEGORY_INSIGHTS: tuple[tuple[str, str, str, str], ...] = (
    (
        "weak_language",
        "Ownership Language",
        "Phrases like 'responsible for' describe a job description, not what you did in it.",
        "Replace the phrase with the verb for what you actually did: managed, built, negotiated.",
    ),
    (
        "missing_metrics",
        "Quantify Your Results",
        "Numbers let a reviewer compare you to other candidates in seconds.",
        "Estimate honestly when exact figures are unavailable: team size, volume, time saved.",
    ),
    (
        "passive_voice",
        "Active Voice",
        "Passive sentences hide who did the work, which reads as distance from the result.",
        "Start the bullet with the action, not with the thing that was acted on.",
    ),
    (
        "responsibility_framing",
        "Outcomes Over Oversight",
        "Saying you managed or oversaw something tells the reader your scope but not your effect.",
        "Follow every scope statement with what changed because of it.",
    ),
    (
        "unclear_impact",
        "State the Impact",
        "An action without a result leaves the reader guessing whether it mattered.",
        "Add a 'resulting in ...' clause that names the business outcome.",
    ),
    (
        "generic_description",
        "Be Specific",
        "Words like 'various' or 'multiple' signal that you are not sure of the details.",
        "Swap each vague quantifier for the real count.",
    ),
)

# (minimum score, first impression, likely outcome, honest feedback), highest tier first.
_HR_TIERS: tuple[tuple[int, str, LikelyOutcome, str], ...] = (
    (
        85,
        "Strong candidate with clear achievements and professional presentation",
        "will_advance",
        "This resume effectively demonstrates value and would advance in most hiring processes.",
    ),
    (
        70,
        "Competent candidate but with noticeable presentation weaknesses",
        "maybe_advance",
        "Resume shows potential but needs improvement to compete against stronger candidates.",
    ),
    (
        50,
        "Candidate has relevant experience but resume fails to demonstrate impact effectively",
        "unlikely_advance",
        "Multiple issues prevent this resume from standing out. Significant revision needed to be competitive.",
    ),
)
_HR_FALLBACK: tuple[str, LikelyOutcome, str] = (
    "Resume indicates inexperience with professional communication and lacks measurable achievements",
    "unlikely_advance",
    "This resume would likely be rejected within seconds. Complete overhaul required to meet professional standards.",
)


def _category_title(category: str) -> str:
    return category.replace("_", " ").title()


def quote_priority(quote: DefectQuote) -> Priority:
    return "high" if quote.category in _HIGH_PRIORITY_CATEGORIES else "medium"


def build_recommendations(quotes: list[DefectQuote]) -> list[Recommendation]:
    limit = int(get_scoring_value("recommendations.max_items", 8))
    recommendations: list[Recommendation] = []
    for quote in quotes[:limit]:
        priority = quote_priority(quote)
        recommendations.append(
            Recommendation(
                priority=priority,
                category=_category_title(quote.category),
                issue=quote.issue,
                solution=_SOLUTION,
                impact=_IMPACT_BY_PRIORITY[priority],
                current_example=quote.original_text,
                improved_example=quote.suggested_improvement,
                difficulty="medium",
                estimated_time_to_fix=_TIME_TO_FIX,
            )
        )
    return recommendations


def build_insights(quotes: list[DefectQuote]) -> list[EducationalInsight]:
    limit = int(get_scoring_value("recommendations.max_insights", 4))
    first_by_category: dict[str, DefectQuote] = {}
    for quote in quotes:
        first_by_category.setdefault(quote.category, quote)

    insights = [_BASELINE_INSIGHT]
    for category, topic, explanation, tip in _CATEGORY_INSIGHTS:
        quote = first_by_category.get(category)
        if quote is None:
            continue
        insights.append(
            EducationalInsight(
                topic=topic,
                explanation=explanation,
                your_example=quote.original_text,
                better_example=quote.suggested_improvement,
                tip=tip,
            )
        )
    return insights[:limit]


def _excerpt(text: str) -> str:
    return text[:_CONCERN_EXCERPT_CHARS] + "..."


def build_hr_perspective(overall_score: int, breakdown: ScoreBreakdown, quotes: list[DefectQuote]) -> HRPerspective:
    """Map the overall score onto a fixed reviewer tier; no input other than the arguments is read."""
    first_impression, likely_outcome, feedback = next(
        ((impression, outcome, text) for minimum, impression, outcome, text in _HR_TIERS if overall_score >= minimum),
        _HR_FALLBACK,
    )
    return HRPerspective(
        first_impression=first_impression,
        likely_outcome=likely_outcome,
        time_to_review=_TIME_TO_REVIEW,
        standout_elements=breakdown.content.positive_points[:_MAX_STANDOUT_ELEMENTS],
        concerning_elements=[quote.issue for quote in quotes[:_MAX_CONCERNING_ELEMENTS]],
        overall_assessment=f"Score: {overall_score}/100 reflects actual competitiveness in today's job market.",
        specific_concerns=[_excerpt(quote.original_text) for quote in quotes[:_MAX_SPECIFIC_CONCERNS]],
        honest_feedback=feedback,
    )
