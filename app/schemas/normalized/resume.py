from __future__ import annotations

from pydantic import BaseModel, Field


class ResumeTokens(BaseModel):
    skills: list[str] = Field(default_factory=list)
    experience_years: int = Field(default=0, ge=0)
    education_levels: list[str] = Field(default_factory=list)
    raw_text: str = ""
