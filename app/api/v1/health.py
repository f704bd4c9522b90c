from fastapi import APIRouter

from app.core.config.scoring import scoring_version

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "scoring_version": scoring_version()}
