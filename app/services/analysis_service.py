from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone

from app.core.config import settings
from app.core.config.scoring import scoring_version
from app.features.category_scorers import score_categories
from app.features.defect_classifier import count_by_category, extract_defect_quotes
from app.features.recommendations import build_hr_perspective, build_insights, build_recommendations
from app.features.rule_auditor import audit_structure, rule_penalty
from app.normalize.segmentation import segment_content
from app.schemas.analysis import AnalysisResult, ConsistencyCheck, ScoreBreakdown

logger = logging.getLogger(__name__)


class AnalysisInputError(RuntimeError):
    def __init__(self, message: str, *, status_code: int = 422):
        super().__init__(message)
        self.status_code = status_code


def validate_resume_text(text: str | None) -> str:
    """Boundary check for callers; the scoring core itself accepts any string."""
    cleaned = (text or "").strip()
    if len(cleaned) < settings.min_resume_chars:
        raise AnalysisInputError(
            f"Resume text is too short to analyze (minimum {settings.min_resume_chars} characters)."
        )
    if len(cleaned) > settings.max_input_chars:
        raise AnalysisInputError(
            f"Resume text is too long to analyze (maximum {settings.max_input_chars} characters)."
        )
    return cleaned


def content_hash(text: str, version: str) -> str:
    return hashlib.sha256(f"{text}|{version}".encode("utf-8")).hexdigest()


def analysis_id(text: str, version: str) -> str:
    return f"{content_hash(text, version)[:16]}-{version}"


def compose_overall_score(breakdown: ScoreBreakdown, penalty: int) -> int:
    # Category scores are already floored at zero; the rule penalty comes off their sum.
    category_total = sum(category.score for category in breakdown.categories())
    return max(0, category_total - penalty)


def analyze_resume(text: str, file_name: str) -> AnalysisResult:
    version = scoring_version()
    text = text or ""

    content = segment_content(text)
    quotes = extract_defect_quotes(content)
    breakdown = score_categories(text, file_name, content, quotes)
    rule_issues = audit_structure(text, content, quotes)
    penalty = rule_penalty(rule_issues)
    overall_score = compose_overall_score(breakdown, penalty)

    digest = content_hash(text, version)
    result = AnalysisResult(
        overall_score=overall_score,
        score_breakdown=breakdown,
        rule_penalty=penalty,
        recommendations=build_recommendations(quotes),
        educational_insights=build_insights(quotes),
        hr_perspective=build_hr_perspective(overall_score, breakdown, quotes),
        resume_quotes=quotes,
        rule_issues=rule_issues,
        consistency_check=ConsistencyCheck(
            analysis_id=analysis_id(text, version),
            content_hash=digest,
            scoring_version=version,
            deterministic_score=True,
            generated_at=datetime.now(timezone.utc),
        ),
    )

    counts = count_by_category(quotes)
    logger.info(
        "resume_analysis_complete id_hash=%s score=%s penalty=%s quotes=%s weak_language=%s missing_metrics=%s version=%s",
        digest[:12],
        overall_score,
        penalty,
        len(quotes),
        counts["weak_language"],
        counts["missing_metrics"],
        version,
    )
    return result
