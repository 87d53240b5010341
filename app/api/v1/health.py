from fastapi import APIRouter

from app.ai.config import ai_enabled
from app.assessment.archetypes import load_archetypes

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {
        "status": "healthy",
        "archetypes": len(load_archetypes()),
        "enrichment_enabled": ai_enabled(),
    }
