from __future__ import annotations

import logging
import math
import re
from typing import Any

from app.core.config.scoring import get_scoring_value
from app.matching.education import education_rank
from app.matching.fuzzy import split_matches
from app.schemas.match import EducationMatch, ExperienceMatch, MatchBreakdown, MatchResult
from app.schemas.normalized import ExperienceRequirement, JobRequirements, ResumeTokens, SkillRequirement
from app.taxonomy import TaxonomyProvider

logger = logging.getLogger(__name__)

_YEARS_RE = re.compile(r"(\d+)")
_DEFAULT_IMPORTANCE_WEIGHTS = {"high": 3, "medium": 2, "low": 1}
_DEFAULT_DIMENSION_WEIGHTS = {
    "skills": 0.35,
    "experience": 0.25,
    "education": 0.15,
    "technology": 0.20,
    "soft_skills": 0.05,
}
_MAX_GAP_SKILLS = 3
_MAX_STRENGTH_SKILLS = 5
_MAX_STRENGTH_TECHNOLOGIES = 3
_RECOMMENDATIONS = {
    "strong": "Strong match! Tailor your resume to highlight matched skills.",
    "decent": "Decent match. Emphasize transferable skills and address gaps.",
    "moderate": "Moderate gaps. Consider gaining additional skills or reframing experience.",
    "weak": "Significant gaps. Focus on bridging the missing skills before applying.",
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _importance_weights() -> dict[str, int]:
    configured = get_scoring_value("matching.importance_weights", _DEFAULT_IMPORTANCE_WEIGHTS) or {}
    return {key: int(configured.get(key, default)) for key, default in _DEFAULT_IMPORTANCE_WEIGHTS.items()}


def dimension_weights() -> dict[str, float]:
    configured = get_scoring_value("matching.weights", _DEFAULT_DIMENSION_WEIGHTS) or {}
    return {key: float(configured.get(key, default)) for key, default in _DEFAULT_DIMENSION_WEIGHTS.items()}


def score_skills(
    resume_skills: list[str],
    requirements: list[SkillRequirement],
    taxonomy: TaxonomyProvider | None = None,
) -> MatchBreakdown:
    if not requirements:
        return MatchBreakdown(score=0, matched=[], missing=[])
    matched, missing = split_matches(resume_skills, [item.skill for item in requirements], taxonomy)

    weights = _importance_weights()
    matched_set = set(matched)
    total = sum(weights[item.importance] for item in requirements)
    earned = sum(weights[item.importance] for item in requirements if item.skill in matched_set)
    score = round_half_up(100 * earned / total) if total else 0
    return MatchBreakdown(score=score, matched=matched, missing=missing)


def score_unweighted(
    resume_skills: list[str],
    required: list[str],
    taxonomy: TaxonomyProvider | None = None,
) -> MatchBreakdown:
    if not required:
        return MatchBreakdown(score=100, matched=[], missing=[])
    matched, missing = split_matches(resume_skills, required, taxonomy)
    return MatchBreakdown(score=round_half_up(100 * len(matched) / len(required)), matched=matched, missing=missing)


def required_years(requirements: list[ExperienceRequirement]) -> int:
    for item in requirements:
        for source in (item.years_required, item.keyword):
            if not source:
                continue
            match = _YEARS_RE.search(source)
            if match:
                return int(match.group(1))
    return 0


def score_experience(resume_years: int, requirements: list[ExperienceRequirement]) -> ExperienceMatch:
    required = required_years(requirements)
    if required == 0:
        return ExperienceMatch(
            score=100,
            resume_years=resume_years,
            required_years=0,
            relevant_experience=["No specific experience requirement"],
            missing_experience=[],
        )

    max_ratio = float(get_scoring_value("matching.max_experience_ratio", 1.5))
    ratio = min(resume_years / required, max_ratio)
    relevant: list[str] = []
    missing: list[str] = []
    if resume_years >= required:
        relevant.append(f"{resume_years} years of experience (meets {required}+ requirement)")
    else:
        missing.append(f"Need {required - resume_years} more years of experience")
    return ExperienceMatch(
        score=min(round_half_up(100 * ratio), 100),
        resume_years=resume_years,
        required_years=required,
        relevant_experience=relevant,
        missing_experience=missing,
    )


def score_education(resume_levels: list[str], required: list[str]) -> EducationMatch:
    if not required:
        return EducationMatch(
            score=100,
            matched=True,
            resume_education=list(resume_levels),
            required_education=[],
            details="No specific education requirement",
        )

    candidate_max = max((education_rank(level) for level in resume_levels), default=0)
    required_max = max((education_rank(label, lowest=True) for label in required), default=0)
    matched = candidate_max >= required_max
    if matched:
        score = 100
        details = "Education requirement met"
    elif candidate_max > 0:
        score = round_half_up(100 * candidate_max / required_max)
        details = f"Have {resume_levels[0]}, need {required[0]}"
    else:
        score = 0
        details = f"Missing required education: {', '.join(required)}"
    return EducationMatch(
        score=score,
        matched=matched,
        resume_education=list(resume_levels),
        required_education=list(required),
        details=details,
    )


def _prioritized_missing(missing: list[str], requirements: list[SkillRequirement]) -> list[str]:
    weights = _importance_weights()
    importance = {item.skill: weights[item.importance] for item in requirements}
    return sorted(missing, key=lambda skill: -importance.get(skill, 0))


def build_gaps(
    skills: MatchBreakdown,
    experience: ExperienceMatch,
    education: EducationMatch,
    requirements: list[SkillRequirement],
) -> list[str]:
    gaps: list[str] = []
    if skills.missing:
        top = _prioritized_missing(skills.missing, requirements)[:_MAX_GAP_SKILLS]
        gaps.append(f"Missing key skills: {', '.join(top)}")
    gaps.extend(experience.missing_experience)
    if not education.matched and education.required_education:
        gaps.append(f"Education: {education.details}")
    return gaps


def build_strengths(
    skills: MatchBreakdown,
    experience: ExperienceMatch,
    education: EducationMatch,
    technologies: MatchBreakdown,
) -> list[str]:
    strengths: list[str] = []
    if skills.matched:
        strengths.append(f"Matched skills: {', '.join(skills.matched[:_MAX_STRENGTH_SKILLS])}")
    if experience.required_years > 0 and experience.score >= 100:
        strengths.append(f"Experience: {experience.resume_years}+ years")
    if education.matched and education.required_education:
        strengths.append("Education requirement met")
    if technologies.matched:
        strengths.append(f"Technologies: {', '.join(technologies.matched[:_MAX_STRENGTH_TECHNOLOGIES])}")
    return strengths


def match_recommendation(match_score: int) -> str:
    tiers = get_scoring_value("matching.recommendation_tiers", {}) or {}
    if match_score >= int(tiers.get("strong", 80)):
        return _RECOMMENDATIONS["strong"]
    if match_score >= int(tiers.get("decent", 60)):
        return _RECOMMENDATIONS["decent"]
    if match_score >= int(tiers.get("moderate", 40)):
        return _RECOMMENDATIONS["moderate"]
    return _RECOMMENDATIONS["weak"]


def calculate_match_score(
    resume_tokens: ResumeTokens | dict[str, Any],
    job_requirements: JobRequirements | dict[str, Any],
    taxonomy: TaxonomyProvider | None = None,
) -> MatchResult:
    tokens = resume_tokens if isinstance(resume_tokens, ResumeTokens) else ResumeTokens.model_validate(resume_tokens)
    job = (
        job_requirements
        if isinstance(job_requirements, JobRequirements)
        else JobRequirements.model_validate(job_requirements)
    )

    skills = score_skills(tokens.skills, job.hard_skills, taxonomy)
    experience = score_experience(tokens.experience_years, job.experience_keywords)
    education = score_education(tokens.education_levels, job.required_education_labels())
    technologies = score_unweighted(tokens.skills, [item.technology for item in job.technologies], taxonomy)
    soft_skills = score_unweighted(tokens.skills, [item.skill for item in job.soft_skills], taxonomy)

    weights = dimension_weights()
    match_score = round_half_up(
        weights["skills"] * skills.score
        + weights["experience"] * experience.score
        + weights["education"] * education.score
        + weights["technology"] * technologies.score
        + weights["soft_skills"] * soft_skills.score
    )
    match_score = max(0, min(100, match_score))

    logger.info(
        "resume_match_complete score=%s skills=%s experience=%s education=%s technology=%s soft_skills=%s",
        match_score,
        skills.score,
        experience.score,
        education.score,
        technologies.score,
        soft_skills.score,
    )
    return MatchResult(
        match_score=match_score,
        skills_match=skills,
        experience_match=experience,
        education_match=education,
        technologies_match=technologies,
        soft_skills_match=soft_skills,
        gaps=build_gaps(skills, experience, education, job.hard_skills),
        strengths=build_strengths(skills, experience, education, technologies),
        recommendation=match_recommendation(match_score),
    )
