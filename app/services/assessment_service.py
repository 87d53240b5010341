from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Sequence

from app.ai.types import AIClient
from app.assessment.archetypes import archetype_for_trait
from app.assessment.job_fit import AlternativePosition, JobFitReport, estimate_job_fit
from app.assessment.traits import compute_trait_scores, dominant_trait, validate_ratings
from app.core.config import settings
from app.integrations.email import DeliveryResult, send_html_email
from app.schemas.assessment import AssessmentAnalysis, AssessmentSubmission
from app.services.enrichment_service import enrich_job_fit
from app.services.report_rendering import render_assessment_html, render_subject

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, Sequence[str]], DeliveryResult]


@dataclass(frozen=True)
class SubmissionResult:
    analysis: AssessmentAnalysis
    delivery: DeliveryResult


def emergency_fallback_report() -> JobFitReport:
    return JobFitReport(
        target_position="Unknown Position",
        fit_percentage=70,
        fit_reasoning="Basic compatibility analysis completed",
        strengths_for_role=["Strong work ethic", "Good communication skills", "Team collaboration"],
        challenges_for_role=["Continue professional development", "Adapt to role requirements"],
        alternative_positions=[
            AlternativePosition(title="Customer Service", fit_percentage=75, reasoning="People skills transfer well"),
            AlternativePosition(title="Administrative Role", fit_percentage=72, reasoning="Organizational skills applicable"),
        ],
        interview_tips=[
            "Highlight your key strengths",
            "Show enthusiasm for the role",
            "Ask thoughtful questions",
            "Prepare specific examples",
            "Research the company culture",
        ],
        development_plan=[
            "Focus on industry-specific skills",
            "Develop leadership capabilities",
            "Enhance technical knowledge",
            "Build communication skills",
            "Pursue relevant certifications",
        ],
    )


def analyze_assessment(
    ratings: Sequence[int],
    target_job_title: str,
    *,
    client: AIClient | None = None,
    rng: random.Random | None = None,
) -> AssessmentAnalysis:
    # InvalidRatingsError propagates; the fallback below covers only internal failures.
    validate_ratings(ratings)
    try:
        scores = compute_trait_scores(ratings)
        personality = archetype_for_trait(dominant_trait(scores))
        report = estimate_job_fit(personality, target_job_title, rng=rng)
        outcome = enrich_job_fit(report, personality.primary_type, target_job_title, client=client)
    except Exception:
        logger.exception("assessment_analysis_failed job=%s", target_job_title)
        return AssessmentAnalysis(
            personality=None,
            trait_scores=None,
            job_fit_analysis=emergency_fallback_report(),
            enhanced=False,
            message="Emergency fallback analysis",
        )

    logger.info(
        "assessment_analyzed type=%s fit=%s enhanced=%s",
        personality.primary_type,
        outcome.report.fit_percentage,
        outcome.enhanced,
    )
    return AssessmentAnalysis(
        personality=personality,
        trait_scores=scores.as_dict(),
        job_fit_analysis=outcome.report,
        enhanced=outcome.enhanced,
        message=outcome.message,
    )


def submit_assessment(
    submission: AssessmentSubmission,
    *,
    client: AIClient | None = None,
    rng: random.Random | None = None,
    sender: EmailSender | None = None,
) -> SubmissionResult:
    analysis = analyze_assessment(submission.ratings, submission.target_job_title, client=client, rng=rng)
    deliver = sender or send_html_email
    try:
        subject = render_subject(
            submission.user_name,
            submission.target_job_title,
            analysis.job_fit_analysis.fit_percentage,
        )
        body = render_assessment_html(submission, analysis)
        delivery = deliver(subject, body, settings.hr_recipients)
    except Exception as exc:  # noqa: BLE001 - reported to the caller as a failed delivery
        logger.exception("assessment_delivery_crashed")
        delivery = DeliveryResult(False, f"Failed to send assessment email: {exc}")

    if not delivery.success:
        logger.error("assessment_delivery_failed fit=%s: %s", analysis.job_fit_analysis.fit_percentage, delivery.message)
    return SubmissionResult(analysis=analysis, delivery=delivery)
