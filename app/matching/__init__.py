from .education import EDUCATION_LEVELS, education_rank, extract_education_levels
from .fuzzy import split_matches, tokens_match
from .resume_tokens import extract_experience_years, extract_resume_tokens, extract_skills

__all__ = [
    "EDUCATION_LEVELS",
    "education_rank",
    "extract_education_levels",
    "tokens_match",
    "split_matches",
    "extract_experience_years",
    "extract_resume_tokens",
    "extract_skills",
]
