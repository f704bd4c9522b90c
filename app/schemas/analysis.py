from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, computed_field

QuoteCategory = Literal[
    "weak_language",
    "passive_voice",
    "responsibility_framing",
    "missing_metrics",
    "unclear_impact",
    "generic_description",
]
ScoreLevel = Literal["excellent", "good", "needs_improvement", "poor"]
Severity = Literal["high", "medium", "low"]
RuleCategory = Literal["structure", "format", "verbiage", "impact", "ats"]
Priority = Literal["high", "medium", "low"]
Difficulty = Literal["easy", "medium", "hard"]
LikelyOutcome = Literal["will_advance", "maybe_advance", "unlikely_advance"]

SEVERITY_WEIGHTS: dict[str, int] = {"high": 4, "medium": 2, "low": 1}


class DefectQuote(BaseModel):
    original_text: str
    context: str
    issue: str
    suggested_improvement: str
    category: QuoteCategory


class Deduction(BaseModel):
    reason: str
    points: int = Field(gt=0)


class CategoryScore(BaseModel):
    score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    level: ScoreLevel
    explanation: str
    why_it_matters: str
    assessment: str
    specific_issues: list[str] = Field(default_factory=list)
    positive_points: list[str] = Field(default_factory=list)
    examples_from_resume: list[str] = Field(default_factory=list)
    deductions: list[Deduction] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
    formatting: CategoryScore
    keywords: CategoryScore
    content: CategoryScore
    ats_compatibility: CategoryScore

    def categories(self) -> list[CategoryScore]:
        return [self.formatting, self.keywords, self.content, self.ats_compatibility]


class RuleIssue(BaseModel):
    severity: Severity
    category: RuleCategory
    issue: str
    evidence: str | None = None
    recommendation: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def penalty(self) -> int:
        return SEVERITY_WEIGHTS[self.severity]


class Recommendation(BaseModel):
    priority: Priority
    category: str
    issue: str
    solution: str
    impact: str
    current_example: str | None = None
    improved_example: str | None = None
    difficulty: Difficulty = "medium"
    estimated_time_to_fix: str


class EducationalInsight(BaseModel):
    topic: str
    explanation: str
    your_example: str | None = None
    better_example: str | None = None
    tip: str | None = None


class HRPerspective(BaseModel):
    first_impression: str
    likely_outcome: LikelyOutcome
    time_to_review: str
    standout_elements: list[str] = Field(default_factory=list)
    concerning_elements: list[str] = Field(default_factory=list)
    overall_assessment: str
    specific_concerns: list[str] = Field(default_factory=list)
    honest_feedback: str


class ConsistencyCheck(BaseModel):
    analysis_id: str
    content_hash: str
    scoring_version: str
    deterministic_score: bool = True
    generated_at: datetime


class AnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    score_breakdown: ScoreBreakdown
    rule_penalty: int = Field(ge=0)
    recommendations: list[Recommendation] = Field(default_factory=list)
    educational_insights: list[EducationalInsight] = Field(default_factory=list)
    hr_perspective: HRPerspective
    resume_quotes: list[DefectQuote] = Field(default_factory=list)
    rule_issues: list[RuleIssue] = Field(default_factory=list)
    consistency_check: ConsistencyCheck


class ResumeAnalysisRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=50000)
    file_name: str = Field(default="resume.pdf", max_length=255)
