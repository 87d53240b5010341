from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any

from app.ai.config import AIConfig, ai_enabled, load_ai_config
from app.ai.factory import get_ai_client
from app.ai.types import AIClient, ChatMessage
from app.assessment.job_fit import JobFitReport

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)

# Fields the text-generation service may rewrite, with (min, max) item counts
# for list fields. Everything else is copied from the computed report.
_TEXT_FIELDS = ("fit_reasoning",)
_LIST_FIELDS: dict[str, tuple[int, int]] = {
    "strengths_for_role": (3, 5),
    "challenges_for_role": (2, 4),
    "interview_tips": (5, 5),
    "development_plan": (5, 5),
}
ENRICHABLE_FIELDS: tuple[str, ...] = _TEXT_FIELDS + tuple(_LIST_FIELDS)

_SYSTEM_PROMPT = (
    "You are an expert personality assessment analyst. Enhance the provided job fit analysis "
    "with more detailed, personalized insights. Preserve the calculated fit percentage. "
    "Respond with valid JSON only."
)


class EnrichmentError(RuntimeError):
    pass


@dataclass(frozen=True)
class EnrichmentOutcome:
    report: JobFitReport
    enhanced: bool
    message: str


def build_enrichment_messages(report: JobFitReport, archetype_label: str, job_title: str) -> list[ChatMessage]:
    user_prompt = "\n".join(
        [
            "Enhance this personality assessment analysis.",
            "",
            f"Target Job: {job_title}",
            f"Personality Type: {archetype_label}",
            f"Current Fit Percentage: {report.fit_percentage}% (PRESERVE THIS EXACT VALUE)",
            f"Current Reasoning: {report.fit_reasoning}",
            f"Current Strengths: {', '.join(report.strengths_for_role)}",
            f"Current Challenges: {', '.join(report.challenges_for_role)}",
            "",
            "Return a JSON object with keys exactly:",
            f"- fit_percentage: {report.fit_percentage} (DO NOT CHANGE)",
            "- fit_reasoning: detailed explanation (string)",
            "- strengths_for_role: 4-5 specific, detailed strengths (array of strings)",
            "- challenges_for_role: 3-4 constructive areas to address (array of strings)",
            "- interview_tips: exactly 5 specific, actionable tips (array of strings)",
            "- development_plan: exactly 5 concrete development steps (array of strings)",
            "Do not include alternative positions.",
        ]
    )
    return [
        ChatMessage(role="system", content=_SYSTEM_PROMPT),
        ChatMessage(role="user", content=user_prompt),
    ]


def parse_enrichment_payload(text: str | None) -> dict[str, Any]:
    content = (text or "").strip()
    if not content:
        raise EnrichmentError("Empty enrichment response.")
    fenced = _FENCE_RE.match(content)
    if fenced:
        content = fenced.group(1)
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise EnrichmentError(f"Enrichment response is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise EnrichmentError("Enrichment response must be a JSON object.")
    return parsed


def _clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def _clean_list(value: Any, minimum: int, maximum: int) -> list[str] | None:
    if not isinstance(value, list):
        return None
    items = [item.strip() for item in value if isinstance(item, str) and item.strip()]
    if len(items) < minimum:
        return None
    return items[:maximum]


def merge_enrichment(original: JobFitReport, patch: dict[str, Any]) -> JobFitReport:
    """Return a copy of ``original`` with whitelisted text fields taken from ``patch``.

    fit_percentage, target_position and alternative_positions always come from
    ``original``; malformed patch values are ignored field by field.
    """
    update: dict[str, Any] = {}
    for field in _TEXT_FIELDS:
        cleaned = _clean_text(patch.get(field))
        if cleaned is not None:
            update[field] = cleaned
    for field, (minimum, maximum) in _LIST_FIELDS.items():
        cleaned_list = _clean_list(patch.get(field), minimum, maximum)
        if cleaned_list is not None:
            update[field] = cleaned_list

    merged = original.model_copy(update=update, deep=True)
    # model_copy skips validation; re-validate so a bad patch can never escape
    return JobFitReport.model_validate(
        {
            **merged.model_dump(),
            "fit_percentage": original.fit_percentage,
            "target_position": original.target_position,
            "alternative_positions": [position.model_dump() for position in original.alternative_positions],
        }
    )


def enrich_job_fit(
    report: JobFitReport,
    archetype_label: str,
    job_title: str,
    *,
    client: AIClient | None = None,
) -> EnrichmentOutcome:
    if client is None and not ai_enabled():
        logger.info("enrichment_skipped reason=llm_disabled")
        return EnrichmentOutcome(report=report, enhanced=False, message="Using dynamic analysis (AI enhancement unavailable)")

    cfg: AIConfig | None = None
    started = time.perf_counter()
    try:
        cfg = load_ai_config()
        active_client = client or get_ai_client()
        raw = active_client.complete(
            build_enrichment_messages(report, archetype_label, job_title),
            temperature=cfg.temperature,
            max_tokens=cfg.max_output_tokens,
            json_mode=True,
        )
        patch = parse_enrichment_payload(raw)
        if patch.get("fit_percentage") not in (None, report.fit_percentage):
            logger.info(
                "enrichment_fit_override_ignored returned=%s pinned=%s",
                patch.get("fit_percentage"),
                report.fit_percentage,
            )
        enriched = merge_enrichment(report, patch)
    except Exception as exc:  # noqa: BLE001 - enrichment must never fail the request
        logger.warning(
            "enrichment_failed model=%s latency_ms=%s: %s",
            cfg.model if cfg else "unknown",
            int((time.perf_counter() - started) * 1000),
            exc,
        )
        return EnrichmentOutcome(report=report, enhanced=False, message="Using dynamic analysis (AI enhancement unavailable)")

    logger.info(
        "enrichment_succeeded model=%s fit=%s latency_ms=%s",
        cfg.model,
        enriched.fit_percentage,
        int((time.perf_counter() - started) * 1000),
    )
    return EnrichmentOutcome(report=enriched, enhanced=True, message="Analysis enhanced with AI insights")
