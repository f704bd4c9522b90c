from .category_scorers import (
    score_ats,
    score_categories,
    score_content,
    score_formatting,
    score_keywords,
    score_level,
)
from .defect_classifier import QUOTE_RULES, QuoteRule, classify_candidate, count_by_category, extract_defect_quotes
from .recommendations import build_hr_perspective, build_insights, build_recommendations
from .rule_auditor import audit_structure, rule_penalty

__all__ = [
    "QuoteRule",
    "QUOTE_RULES",
    "classify_candidate",
    "count_by_category",
    "extract_defect_quotes",
    "score_formatting",
    "score_keywords",
    "score_content",
    "score_ats",
    "score_categories",
    "score_level",
    "audit_structure",
    "rule_penalty",
    "build_recommendations",
    "build_insights",
    "build_hr_perspective",
]
