import logging

from fastapi import APIRouter, HTTPException, Request, status

from app.assessment.terms import ASSESSMENT_TERMS, RATING_SCALE
from app.core.rate_limit import rate_limit
from app.schemas.assessment import (
    AnalyzeRequest,
    AssessmentAnalysis,
    AssessmentSubmission,
    SubmissionResponse,
    TermsResponse,
)
from app.services.assessment_service import analyze_assessment, submit_assessment

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/assessment/terms", response_model=TermsResponse)
def assessment_terms():
    return TermsResponse(terms=list(ASSESSMENT_TERMS), scale=dict(RATING_SCALE))


@router.post("/assessment/analyze", response_model=AssessmentAnalysis)
@rate_limit()
def analyze(request: Request, payload: AnalyzeRequest):
    _ = request
    return analyze_assessment(payload.ratings, payload.target_job_title)


@router.post("/assessment/submit", response_model=SubmissionResponse)
@rate_limit()
def submit(request: Request, payload: AssessmentSubmission):
    _ = request
    result = submit_assessment(payload)
    if not result.delivery.success:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "Failed to send assessment email", "details": result.delivery.message},
        )

    analysis = result.analysis
    return SubmissionResponse(
        success=True,
        message=result.delivery.message,
        fit_percentage=analysis.job_fit_analysis.fit_percentage,
        personality_type=analysis.personality.primary_type if analysis.personality else None,
        enhanced=analysis.enhanced,
    )
