from __future__ import annotations

from pydantic import BaseModel, Field

from app.schemas.normalized import JobRequirements


class MatchBreakdown(BaseModel):
    score: int = Field(ge=0, le=100)
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


class ExperienceMatch(BaseModel):
    score: int = Field(ge=0, le=100)
    resume_years: int = Field(ge=0)
    required_years: int = Field(ge=0)
    relevant_experience: list[str] = Field(default_factory=list)
    missing_experience: list[str] = Field(default_factory=list)


class EducationMatch(BaseModel):
    score: int = Field(ge=0, le=100)
    matched: bool
    resume_education: list[str] = Field(default_factory=list)
    required_education: list[str] = Field(default_factory=list)
    details: str


class MatchResult(BaseModel):
    match_score: int = Field(ge=0, le=100)
    skills_match: MatchBreakdown
    experience_match: ExperienceMatch
    education_match: EducationMatch
    technologies_match: MatchBreakdown
    soft_skills_match: MatchBreakdown
    gaps: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    recommendation: str


class MatchRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=50000)
    job_requirements: JobRequirements
    reference_year: int | None = Field(default=None, ge=1900, le=2200)
