from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.matching import extract_resume_tokens
from app.schemas.analysis import AnalysisResult, ResumeAnalysisRequest
from app.schemas.match import MatchRequest, MatchResult
from app.services.analysis_service import AnalysisInputError, analyze_resume, validate_resume_text
from app.services.match_service import calculate_match_score

router = APIRouter()


def _ensure_valid_text(raw: str) -> None:
    # Only the bounds are checked here; the submitted text is analyzed as-is so ids match direct calls.
    try:
        validate_resume_text(raw)
    except AnalysisInputError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/analysis/resume", response_model=AnalysisResult)
async def analysis_resume(payload: ResumeAnalysisRequest):
    _ensure_valid_text(payload.resume_text)
    return analyze_resume(payload.resume_text, payload.file_name)


@router.post("/analysis/match", response_model=MatchResult)
async def analysis_match(payload: MatchRequest):
    _ensure_valid_text(payload.resume_text)
    tokens = extract_resume_tokens(payload.resume_text, reference_year=payload.reference_year)
    return calculate_match_score(tokens, payload.job_requirements)
