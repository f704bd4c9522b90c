from .content import SECTION_NAMES, SectionName, SegmentedContent
from .jd import (
    EducationRequirement,
    ExperienceRequirement,
    Importance,
    JobRequirements,
    SkillRequirement,
    TechnologyRequirement,
)
from .resume import ResumeTokens

__all__ = [
    "SECTION_NAMES",
    "SectionName",
    "SegmentedContent",
    "Importance",
    "SkillRequirement",
    "TechnologyRequirement",
    "ExperienceRequirement",
    "EducationRequirement",
    "JobRequirements",
    "ResumeTokens",
]
