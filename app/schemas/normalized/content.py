from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SectionName = Literal["summary", "experience", "education", "skills", "contact"]
SECTION_NAMES: tuple[SectionName, ...] = ("summary", "experience", "education", "skills", "contact")


def _empty_sections() -> dict[str, list[str]]:
    return {name: [] for name in SECTION_NAMES}


class SegmentedContent(BaseModel):
    """Résumé text split once into lines, sentences, bullets and named sections."""

    model_config = ConfigDict(frozen=True)

    lines: list[str] = Field(default_factory=list)
    sentences: list[str] = Field(default_factory=list)
    bullet_points: list[str] = Field(default_factory=list)
    sections: dict[str, list[str]] = Field(default_factory=_empty_sections)
    achievements: list[str] = Field(default_factory=list)
    word_count: int = Field(default=0, ge=0)

    def section_lines(self, name: SectionName) -> list[str]:
        return list(self.sections.get(name, []))

    def section_text(self, name: SectionName) -> str:
        return " ".join(self.sections.get(name, []))

    def has_section(self, name: SectionName) -> bool:
        return bool(self.sections.get(name))
