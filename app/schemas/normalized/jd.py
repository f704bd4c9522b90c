from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

Importance = Literal["high", "medium", "low"]


class SkillRequirement(BaseModel):
    skill: str = Field(min_length=1)
    importance: Importance = "medium"
    category: str | None = None
    frequency: int | None = Field(default=None, ge=0)

    @field_validator("importance", mode="before")
    @classmethod
    def _normalize_importance(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class TechnologyRequirement(BaseModel):
    technology: str = Field(min_length=1)
    category: str | None = None
    frequency: int | None = Field(default=None, ge=0)


class ExperienceRequirement(BaseModel):
    keyword: str | None = None
    years_required: str | None = None
    level: str | None = None
    specific_experience: list[str] = Field(default_factory=list)

    @field_validator("years_required", mode="before")
    @classmethod
    def _coerce_years(cls, value: object) -> object:
        if isinstance(value, (int, float)):
            return str(int(value))
        return value


class EducationRequirement(BaseModel):
    level: str | None = None
    field: str | None = None
    requirement: str | None = None


class JobRequirements(BaseModel):
    hard_skills: list[SkillRequirement] = Field(default_factory=list)
    soft_skills: list[SkillRequirement] = Field(default_factory=list)
    technologies: list[TechnologyRequirement] = Field(default_factory=list)
    experience_keywords: list[ExperienceRequirement] = Field(default_factory=list)
    education_requirements: list[str | EducationRequirement] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)

    def required_education_labels(self) -> list[str]:
        labels: list[str] = []
        for item in self.education_requirements:
            if isinstance(item, str):
                if item.strip():
                    labels.append(item.strip())
            elif item.level:
                labels.append(item.level)
            elif item.requirement:
                labels.append(item.requirement)
        return labels
