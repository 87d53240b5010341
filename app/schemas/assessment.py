from __future__ import annotations

from datetime import date
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from app.assessment.archetypes import Archetype
from app.assessment.job_fit import JobFitReport
from app.assessment.terms import MAX_RATING, MIN_RATING, TERM_COUNT

Rating = Annotated[int, Field(ge=MIN_RATING, le=MAX_RATING, strict=True)]
RatingVector = Annotated[list[Rating], Field(min_length=TERM_COUNT, max_length=TERM_COUNT)]


def _required_text(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("must not be blank")
    return cleaned


class AnalyzeRequest(BaseModel):
    ratings: RatingVector
    target_job_title: str = Field(min_length=1, max_length=200)

    @field_validator("target_job_title")
    @classmethod
    def _strip_job_title(cls, value: str) -> str:
        return _required_text(value)


class AssessmentSubmission(BaseModel):
    user_name: str = Field(min_length=1, max_length=120)
    user_position: str | None = Field(default=None, max_length=200)
    target_job_title: str = Field(min_length=1, max_length=200)
    assessment_date: date = Field(default_factory=date.today)
    ratings: RatingVector

    @field_validator("user_name", "target_job_title")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        return _required_text(value)

    @field_validator("user_position")
    @classmethod
    def _strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class AssessmentAnalysis(BaseModel):
    personality: Archetype | None = None
    trait_scores: dict[str, float] | None = None
    job_fit_analysis: JobFitReport
    enhanced: bool = False
    message: str


class SubmissionResponse(BaseModel):
    success: bool
    message: str
    fit_percentage: int
    personality_type: str | None = None
    enhanced: bool = False


class TermsResponse(BaseModel):
    terms: list[str]
    scale: dict[int, str]
